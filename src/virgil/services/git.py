"""Git operations for virgil."""

import logging
import subprocess
from pathlib import Path

from ..constants import GIT_TIMEOUT

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Git command failed."""

    pass


def run_git(
    *args: str,
    cwd: Path | None = None,
    check: bool = True,
    timeout: int | None = None,
) -> str:
    """Run a git command and return stripped stdout.

    Args:
        *args: Arguments passed to git
        cwd: Working directory (defaults to the current directory)
        check: Raise GitError on a non-zero exit code
        timeout: Optional timeout in seconds (default: GIT_TIMEOUT)

    Returns:
        Command stdout without surrounding whitespace

    Raises:
        GitError: If git is missing, times out, or fails with check=True
    """
    timeout = timeout or GIT_TIMEOUT
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise GitError(f"git {args[0]} timed out after {timeout} seconds") from e
    except FileNotFoundError:
        raise GitError("git executable not found in PATH") from None

    if check and result.returncode != 0:
        raise GitError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
    return result.stdout.strip()


def get_repo_root(cwd: Path | None = None) -> Path:
    """Return the top-level directory of the repository containing cwd.

    Raises:
        GitError: If cwd is not inside a git repository
    """
    try:
        return Path(run_git("rev-parse", "--show-toplevel", cwd=cwd))
    except GitError as e:
        raise GitError("Not a git repository") from e


def get_head_sha(cwd: Path | None = None) -> str:
    """Return the full SHA of HEAD."""
    return run_git("rev-parse", "HEAD", cwd=cwd)


def get_remote_url(name: str = "origin", cwd: Path | None = None) -> str:
    """Return the URL configured for a remote."""
    return run_git("remote", "get-url", name, cwd=cwd)


class GitRepositoryState:
    """Repository state read from a working tree.

    Answers ``get_remote`` / ``get_commit`` for the markdown compiler. A
    directory that is not a repository, or has no ``origin`` remote, simply
    yields None.
    """

    def __init__(self, cwd: Path | None = None, remote_name: str = "origin") -> None:
        self.cwd = cwd
        self.remote_name = remote_name

    def get_remote(self) -> str | None:
        try:
            return get_remote_url(self.remote_name, cwd=self.cwd) or None
        except GitError as e:
            logger.debug(f"No remote '{self.remote_name}': {e}")
            return None

    def get_commit(self) -> str | None:
        try:
            return get_head_sha(cwd=self.cwd) or None
        except GitError as e:
            logger.debug(f"No HEAD commit: {e}")
            return None
