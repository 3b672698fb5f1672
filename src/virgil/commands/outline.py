"""Outline command: show the step hierarchy in navigation order."""

from pathlib import Path

import typer
from rich.markup import escape
from rich.tree import Tree

from ..core import NavigationEntry, build_navigation_map, build_tree, flatten_tree
from ..models import WalkthroughStep
from ..output import get_output_context
from ..services import WalkthroughLoadError, load_any


def _step_label(position: int, step: WalkthroughStep) -> str:
    label = f"{position + 1}. {escape(step.title)} [dim]({step.step_type.value})[/dim]"
    if step.location:
        label += f"\n[cyan]{escape(step.location)}[/cyan]"
    if step.base_location:
        label += f"\n[magenta]base {escape(step.base_location)}[/magenta]"
    return label


def _step_record(position: int, step: WalkthroughStep, entry: NavigationEntry) -> dict:
    return {
        "index": position,
        "id": step.id,
        "title": step.title,
        "type": step.step_type.value,
        "location": step.location,
        "base_location": step.base_location,
        "parent_index": entry.parent_index,
        "prev_sibling_index": entry.prev_sibling_index,
        "next_sibling_index": entry.next_sibling_index,
    }


def outline(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Walkthrough (.walkthrough.json or .md)"),
) -> None:
    """Print the steps as a tree in next/previous order."""
    out = get_output_context(ctx)

    if not file.is_file():
        out.error(f"File not found: {file}")
        raise typer.Exit(1)

    try:
        walkthrough = load_any(file).walkthrough
    except WalkthroughLoadError as e:
        out.error(str(e))
        raise typer.Exit(1) from None

    forest = build_tree(walkthrough.steps)
    flat = flatten_tree(forest)
    navigation = build_navigation_map(forest, flat)

    if out.json_mode:
        out.print_json(
            {
                "title": walkthrough.title,
                "steps": [
                    _step_record(position, step, navigation[position])
                    for position, step in enumerate(flat)
                ],
            }
        )
        return

    # Stack pops visit nodes in the same pre-order as flatten_tree
    tree = Tree(f"[bold]{escape(walkthrough.title)}[/bold]")
    pending = [(node, tree) for node in reversed(forest)]
    position = 0
    while pending:
        node, branch = pending.pop()
        child_branch = branch.add(_step_label(position, node.step))
        position += 1
        pending.extend((child, child_branch) for child in reversed(node.children))

    if walkthrough.description:
        out.console.print(escape(walkthrough.description), style="italic")
    out.console.print(tree)
