"""Virgil CLI: guided code walkthroughs."""

import typer

from virgil import __version__

from .commands import comment, convert, init, list_walkthroughs, outline, validate
from .logging import configure_logging
from .output import OutputContext


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"virgil {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="virgil",
    help="Compile, inspect and annotate guided code walkthroughs",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Virgil - guided code walkthroughs."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    ctx.obj = OutputContext(console=console, json_mode=json_output, quiet=quiet)


app.command()(init)
app.command()(convert)
app.command()(validate)
app.command()(outline)
app.command("list")(list_walkthroughs)
app.command()(comment)
