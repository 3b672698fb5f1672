"""Git remote URL normalization for repository comparison."""

import re

_SSH_SHORTHAND = re.compile(r"^git@([^:]+):(.+)$")
_SCHEME = re.compile(r"^(https?://|git://)")
_AUTH_PREFIX = re.compile(r"^[^@]+@")


def _normalize_once(url: str) -> str:
    normalized = url.strip().lower()
    normalized = normalized.rstrip("/")
    normalized = normalized.removesuffix(".git")

    ssh = _SSH_SHORTHAND.match(normalized)
    if ssh:
        normalized = f"{ssh.group(1)}/{ssh.group(2)}"

    normalized = _SCHEME.sub("", normalized)
    # Must run after the SSH rewrite, otherwise "git@" would be eaten first
    normalized = _AUTH_PREFIX.sub("", normalized)
    return normalized


def normalize_remote_url(url: str) -> str:
    """Canonicalize a git remote URL so equal repositories compare equal.

    ``git@github.com:org/repo.git``, ``https://github.com/org/repo/`` and
    ``HTTPS://GITHUB.COM/org/repo.GIT`` all become ``github.com/org/repo``.

    The pipeline is repeated until the string stops changing, which keeps
    the function idempotent for inputs such as ``repo.git.git``.

    Args:
        url: Remote URL in SSH shorthand, HTTP(S), git:// or bare form

    Returns:
        Normalized ``host/path`` string
    """
    current = _normalize_once(url)
    while True:
        following = _normalize_once(current)
        if following == current:
            return current
        current = following


def remotes_match(first: str, second: str) -> bool:
    """Return True if both remotes point at the same repository."""
    return normalize_remote_url(first) == normalize_remote_url(second)
