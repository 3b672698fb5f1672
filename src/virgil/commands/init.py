"""Init command implementation."""

import typer

from ..config import get_config_dir, write_config_template
from ..output import get_output_context


def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Create .virgil/config.toml in the current project."""
    out = get_output_context(ctx)
    config_dir = get_config_dir()
    config_path = config_dir / "config.toml"

    if config_path.exists() and not force:
        out.print(f"[yellow]Config already exists:[/yellow] {config_path}")
        out.result({"path": str(config_path), "created": False})
        return

    write_config_template(config_dir)
    out.success(f"Created config template: {config_path}", {"path": str(config_path)})
