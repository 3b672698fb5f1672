"""External boundaries for virgil.

This package provides the I/O side of virgil:
- git: Git subprocess wrapper and repository state provider
- store: Walkthrough document loading and saving
"""

from .git import (
    GitError,
    GitRepositoryState,
    get_head_sha,
    get_remote_url,
    get_repo_root,
    run_git,
)
from .store import (
    WalkthroughLoadError,
    default_output_path,
    find_walkthroughs,
    is_markdown,
    load_any,
    load_walkthrough,
    save_walkthrough,
)

__all__ = [
    "GitError",
    "GitRepositoryState",
    "WalkthroughLoadError",
    "default_output_path",
    "find_walkthroughs",
    "get_head_sha",
    "get_remote_url",
    "get_repo_root",
    "is_markdown",
    "load_any",
    "load_walkthrough",
    "run_git",
    "save_walkthrough",
]
