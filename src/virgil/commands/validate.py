"""Validate command: report problems in a walkthrough."""

import logging
from pathlib import Path

import typer

from ..config import ConfigError, get_config_dir, load_config
from ..core import remotes_match, validate_walkthrough
from ..models import Walkthrough
from ..output import get_output_context
from ..services import GitError, WalkthroughLoadError, get_remote_url, load_any

logger = logging.getLogger(__name__)


def check_remote(walkthrough: Walkthrough, cwd: Path) -> list[str]:
    """Warn when the walkthrough was written for a different repository."""
    repository = walkthrough.repository
    if repository is None or not repository.remote:
        return []
    try:
        current = get_remote_url(cwd=cwd)
    except GitError as e:
        logger.debug(f"Skipping remote check: {e}")
        return []
    if remotes_match(repository.remote, current):
        return []
    return [
        f"Walkthrough remote {repository.remote} does not match this repository's "
        f"origin ({current})"
    ]


def validate(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Walkthrough (.walkthrough.json or .md)"),
    strict: bool | None = typer.Option(
        None, "--strict/--no-strict", help="Exit with code 2 when there are warnings"
    ),
) -> None:
    """Check a walkthrough and report warnings."""
    out = get_output_context(ctx)

    try:
        config = load_config(get_config_dir())
    except ConfigError as e:
        out.error(str(e))
        raise typer.Exit(1) from None

    if not file.is_file():
        out.error(f"File not found: {file}")
        raise typer.Exit(1)

    try:
        result = load_any(file)
    except WalkthroughLoadError as e:
        out.error(str(e))
        raise typer.Exit(1) from None

    walkthrough = result.walkthrough
    warnings = [
        *result.warnings,
        *validate_walkthrough(walkthrough),
        *check_remote(walkthrough, file.resolve().parent),
    ]

    if out.json_mode:
        out.print_json(
            {
                "file": str(file),
                "title": walkthrough.title,
                "steps": len(walkthrough.steps),
                "valid": not warnings,
                "warnings": warnings,
            }
        )
    elif warnings:
        out.warnings(warnings, str(file))
    else:
        out.success(f"{file}: no problems found ({len(walkthrough.steps)} steps)")

    if strict is None:
        strict = config.validate_.strict
    if strict and warnings:
        raise typer.Exit(2)
