"""CLI commands for configuration management."""
from __future__ import annotations

import typer

from lexicon import ui
from lexicon.error_handler import handle_errors

app = typer.Typer(
    name="config",
    help="Manage lexicon configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command()
@handle_errors
def show():
    """Display the resolved configuration (all layers merged)."""
    from rich.panel import Panel
    from rich.table import Table
    from lexicon.core.config_service import get_config_service

    info = get_config_service().show()

    sources = info["sources"]
    ui.console.print(Panel(
        f"Global:  {sources['global_config'] or '[dim]not found[/dim]'}\n"
        f"Project: {sources['project_config'] or '[dim]not found[/dim]'}",
        title="Config Sources",
        border_style="cyan",
    ))

    resolved = info["resolved"]
    for section in ("locale", "catalogs"):
        values = resolved.get(section, {})
        table = Table(title=section.capitalize(), show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        for key, val in values.items():
            table.add_row(key, str(val) if val else "[dim]not set[/dim]")
        ui.console.print(table)


@app.command("set")
@handle_errors
def set_value(
    key: str = typer.Argument(..., help="Config key in dotted notation (e.g. locale.default)"),
    value: str = typer.Argument(..., help="Value to set"),
):
    """Set a global configuration value."""
    from lexicon.core.config_service import DEFAULTS, _get_nested, get_config_service
    from lexicon.errors import ConfigError

    section = key.split(".", 1)[0]
    if section not in DEFAULTS or _get_nested(DEFAULTS, key) is None:
        raise ConfigError(f"Unknown config key '{key}'")

    get_config_service().set_global(key, value)
    ui.console.print(f"[green]Set[/green] {key} = {value}")


@app.command()
@handle_errors
def init(
    catalog_dir: str = typer.Option("./i18n", "--dir", "-d", help="Catalog directory to record"),
):
    """Create a .lexicon.toml in the current directory."""
    from lexicon.core.config_service import get_config_service

    try:
        path = get_config_service().init_project_config(catalog_dir=catalog_dir)
    except FileExistsError as e:
        ui.console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(1)
    ui.console.print(f"[green]Created[/green] {path}")


@app.command()
@handle_errors
def path():
    """Show config file locations."""
    from lexicon.core.config_service import get_config_service

    for label, location in get_config_service().config_paths().items():
        ui.console.print(f"[cyan]{label}:[/cyan] {location}")
