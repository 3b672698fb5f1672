"""List command: find walkthrough files in a directory."""

from pathlib import Path

import typer
from rich.markup import escape

from ..output import get_output_context
from ..services import WalkthroughLoadError, find_walkthroughs, load_walkthrough


def list_walkthroughs(
    ctx: typer.Context,
    directory: Path = typer.Argument(Path("."), help="Directory to search"),
) -> None:
    """List *.walkthrough.json files."""
    out = get_output_context(ctx)
    files = find_walkthroughs(directory)

    entries = []
    for path in files:
        try:
            walkthrough = load_walkthrough(path)
        except WalkthroughLoadError as e:
            entries.append({"path": str(path), "error": str(e)})
        else:
            entries.append(
                {"path": str(path), "title": walkthrough.title, "steps": len(walkthrough.steps)}
            )

    if out.json_mode:
        out.print_json({"walkthroughs": entries})
        return

    if not entries:
        out.print("[yellow]No *.walkthrough.json files found[/yellow]")
        return

    for entry in entries:
        if "error" in entry:
            out.print(f"[red]✗[/red] {escape(entry['path'])}: invalid walkthrough")
        else:
            out.print(
                f"[green]✓[/green] {escape(entry['path'])}: {escape(entry['title'])} "
                f"({entry['steps']} steps)"
            )
