"""Convert command: markdown walkthrough to walkthrough JSON."""

from pathlib import Path

import typer

from ..config import ConfigError, get_config_dir, load_config
from ..core import parse_markdown_walkthrough
from ..output import get_output_context
from ..services import GitRepositoryState, default_output_path, save_walkthrough


def convert(
    ctx: typer.Context,
    input_file: Path = typer.Argument(..., help="Markdown walkthrough to convert"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output JSON file (defaults to stdout)"
    ),
    write: bool = typer.Option(
        False, "--write", "-w", help="Write next to the input as <name>.walkthrough.json"
    ),
    no_infer: bool = typer.Option(
        False, "--no-infer", help="Do not fill remote/commit from git"
    ),
) -> None:
    """Convert a markdown walkthrough to JSON."""
    out = get_output_context(ctx)

    try:
        config = load_config(get_config_dir())
    except ConfigError as e:
        out.error(str(e))
        raise typer.Exit(1) from None

    if not input_file.is_file():
        out.error(f"Input file not found: {input_file}")
        raise typer.Exit(1)

    try:
        markdown = input_file.read_text(encoding="utf-8")
    except OSError as e:
        out.error(f"Cannot read {input_file}: {e}")
        raise typer.Exit(1) from None

    repository_state = None
    if config.convert.infer_repository and not no_infer:
        repository_state = GitRepositoryState(input_file.resolve().parent)

    result = parse_markdown_walkthrough(markdown, repository_state)
    walkthrough = result.walkthrough
    out.warnings(result.warnings, str(input_file))

    if output is None and write:
        output = default_output_path(input_file, config.convert.output_suffix)

    indent = config.convert.indent or None
    if output is None:
        if out.json_mode:
            out.print_json(
                {
                    "walkthrough": walkthrough.model_dump(
                        mode="json", by_alias=True, exclude_none=True
                    ),
                    "warnings": result.warnings,
                }
            )
        else:
            typer.echo(walkthrough.to_json(indent=indent))
        return

    try:
        save_walkthrough(walkthrough, output, indent=indent)
    except OSError as e:
        out.error(f"Cannot write {output}: {e}")
        raise typer.Exit(1) from None

    out.success(
        f"Converted {input_file} to {output} ({len(walkthrough.steps)} steps)",
        {"output": str(output), "steps": len(walkthrough.steps), "warnings": result.warnings},
    )
