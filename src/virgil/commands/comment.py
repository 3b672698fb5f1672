"""Comment command: append a reviewer comment to a step."""

from pathlib import Path

import typer

from ..config import ConfigError, get_config_dir, load_config
from ..output import get_output_context
from ..services import WalkthroughLoadError, is_markdown, load_walkthrough, save_walkthrough


def comment(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Walkthrough JSON file"),
    step: int = typer.Option(..., "--step", "-s", help="Step id"),
    body: str = typer.Option(..., "--body", "-b", help="Comment text"),
    author: str | None = typer.Option(None, "--author", "-a", help="Comment author"),
) -> None:
    """Add a comment to a step and save the walkthrough."""
    out = get_output_context(ctx)

    try:
        config = load_config(get_config_dir())
    except ConfigError as e:
        out.error(str(e))
        raise typer.Exit(1) from None

    if is_markdown(file):
        out.error("Comments can only be added to walkthrough JSON files")
        raise typer.Exit(1)

    if not body.strip():
        out.error("Comment body is empty")
        raise typer.Exit(1)

    try:
        walkthrough = load_walkthrough(file)
    except WalkthroughLoadError as e:
        out.error(str(e))
        raise typer.Exit(1) from None

    target = walkthrough.get_step(step)
    if target is None:
        out.error(f"Step not found: {step}")
        raise typer.Exit(1)

    added = target.add_comment(author or config.comments.author, body)
    save_walkthrough(walkthrough, file, indent=config.convert.indent or None)
    out.success(
        f"Added comment to step {step}: {target.title}",
        {"step": step, "comment_id": added.id},
    )
