"""Output formatting for virgil CLI."""

import json
from dataclasses import dataclass
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape


@dataclass
class OutputContext:
    """Console plus output mode, carried on ``typer.Context.obj``."""

    console: Console
    json_mode: bool = False
    quiet: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message respecting output mode."""
        if not self.json_mode and not self.quiet:
            self.console.print(message, style=style)

    def print_json(self, data: dict[str, Any]) -> None:
        """Print JSON data to stdout."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def result(self, data: dict[str, Any], message: str = "") -> None:
        """Print result in appropriate format."""
        if self.json_mode:
            self.print_json(data)
        elif message:
            self.console.print(message)

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format."""
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {escape(message)}[/red]", soft_wrap=True)

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print success message in appropriate format."""
        if self.json_mode:
            self.print_json({"success": message, **(data or {})})
        elif not self.quiet:
            self.console.print(f"[green]{escape(message)}[/green]", soft_wrap=True)

    def warnings(self, warnings: list[str], source: str | None = None) -> None:
        """Print compiler/validation warnings (suppressed in json mode)."""
        if self.json_mode or not warnings:
            return
        header = f"Warnings for {source}:" if source else "Warnings:"
        self.console.print(f"[yellow]{escape(header)}[/yellow]", soft_wrap=True)
        for warning in warnings:
            self.console.print(
                f"[yellow]- {escape(warning)}[/yellow]", highlight=False, soft_wrap=True
            )


def get_output_context(ctx: typer.Context | None = None) -> OutputContext:
    """Return the OutputContext set up by the CLI callback.

    Falls back to a plain stderr console when no context was set.
    """
    if ctx is not None and isinstance(ctx.obj, OutputContext):
        return ctx.obj
    return OutputContext(Console(stderr=True))
