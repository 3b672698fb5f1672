"""Reading and writing walkthrough documents."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from ..constants import WALKTHROUGH_SUFFIX
from ..core import ParseResult, RepositoryStateProvider, parse_markdown_walkthrough
from ..models import Walkthrough

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")


class WalkthroughLoadError(Exception):
    """Walkthrough file could not be read or is not a valid walkthrough."""

    pass


def find_walkthroughs(directory: Path) -> list[Path]:
    """List ``*.walkthrough.json`` files directly inside a directory."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.glob(f"*{WALKTHROUGH_SUFFIX}") if p.is_file())


def load_walkthrough(path: Path) -> Walkthrough:
    """Load and validate a persisted walkthrough.

    Args:
        path: Path to a walkthrough JSON file

    Returns:
        Validated Walkthrough

    Raises:
        WalkthroughLoadError: If the file is unreadable, not JSON, or does
            not match the walkthrough schema
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise WalkthroughLoadError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise WalkthroughLoadError(f"Invalid JSON in {path}: {e}") from e

    try:
        return Walkthrough.model_validate(data)
    except ValidationError as e:
        raise WalkthroughLoadError(f"Invalid walkthrough in {path}: {e}") from e


def save_walkthrough(walkthrough: Walkthrough, path: Path, indent: int | None = 2) -> Path:
    """Write a walkthrough in its persisted JSON form.

    Args:
        walkthrough: Walkthrough to write
        path: Destination file (parent directories are created)
        indent: JSON indentation (None for compact output)

    Returns:
        The path written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(walkthrough.to_json(indent=indent) + "\n", encoding="utf-8")
    logger.debug(f"Wrote {len(walkthrough.steps)} steps to {path}")
    return path


def is_markdown(path: Path) -> bool:
    return path.suffix.lower() in MARKDOWN_SUFFIXES


def load_any(path: Path, repository_state: RepositoryStateProvider | None = None) -> ParseResult:
    """Load a walkthrough from markdown or JSON.

    Markdown goes through the compiler and carries its warnings; JSON is
    loaded as-is with no warnings.

    Raises:
        WalkthroughLoadError: If the file cannot be read or the JSON is invalid
    """
    if not is_markdown(path):
        return ParseResult(walkthrough=load_walkthrough(path))

    try:
        markdown = path.read_text(encoding="utf-8")
    except OSError as e:
        raise WalkthroughLoadError(f"Cannot read {path}: {e}") from e
    return parse_markdown_walkthrough(markdown, repository_state)


def default_output_path(source: Path, suffix: str = WALKTHROUGH_SUFFIX) -> Path:
    """``docs/tour.md`` -> ``docs/tour.walkthrough.json``."""
    return source.with_name(source.stem + suffix)
