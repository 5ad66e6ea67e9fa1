"""
lexicon: look up and format localized strings from the command line.
"""
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from lexicon import ui
from lexicon.completions import complete_category, complete_locale

app = typer.Typer(
    name="lexicon",
    help="Locale-aware catalog lookup and message formatting.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

from lexicon.commands import catalog_cmd, config_cmd

app.add_typer(config_cmd.app, name="config", help="Manage configuration")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log catalog resolution details."),
    plain: bool = typer.Option(False, "--plain", help="Plain output without colors."),
):
    """Locale-aware catalog lookup and message formatting."""
    if plain:
        ui.set_plain_mode()
    if verbose:
        from rich.logging import RichHandler
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            handlers=[RichHandler(console=ui.console, show_time=False)],
        )


@app.command()
def lookup(
    category: str = typer.Argument(..., help="Category: buttons, labels, menus, errors, messages, logs", autocompletion=complete_category),
    key: str = typer.Argument(..., help="Key (or pattern key when arguments follow)"),
    arguments: Optional[List[str]] = typer.Argument(None, help="Positional arguments for {0}, {1}, ..."),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Locale tag, e.g. de_DE", autocompletion=complete_locale),
    catalog: Optional[str] = typer.Option(None, "--catalog", "-c", help="Catalog name to bind to the category"),
    catalog_dir: Optional[Path] = typer.Option(None, "--dir", "-d", help="Catalog directory (YAML provider)"),
    raw: bool = typer.Option(False, "--raw", help="Pass arguments as strings without number conversion"),
):
    """[bold cyan]Look up[/bold cyan] a string, formatting it when arguments are given."""
    catalog_cmd.lookup(category, key, arguments or [], locale, catalog, catalog_dir, raw)


@app.command()
def show(
    category: str = typer.Argument(..., help="Category to list", autocompletion=complete_category),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Locale tag, e.g. de_DE", autocompletion=complete_locale),
    catalog: Optional[str] = typer.Option(None, "--catalog", "-c", help="Catalog name to bind to the category"),
    catalog_dir: Optional[Path] = typer.Option(None, "--dir", "-d", help="Catalog directory (YAML provider)"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """[bold]List[/bold] every key and value of a category's catalog."""
    catalog_cmd.show(category, locale, catalog, catalog_dir, as_json)


@app.command()
def check(
    catalog: str = typer.Argument(..., help="Catalog name, e.g. app.labels"),
    locales: Optional[List[str]] = typer.Option(None, "--locale", "-l", help="Locale to check (repeatable; default: all found)"),
    catalog_dir: Optional[Path] = typer.Option(None, "--dir", "-d", help="Catalog directory (YAML provider)"),
):
    """[bold]Check[/bold] which base-catalog keys each locale is missing."""
    catalog_cmd.check(catalog, locales or [], catalog_dir)


@app.command()
def providers():
    """List available catalog providers."""
    from lexicon.catalogs import get_provider_names
    from lexicon.plugins import load_provider_plugins

    for name in get_provider_names():
        ui.console.print(f"[cyan]{name}[/cyan]")
    for plugin in load_provider_plugins():
        if not plugin.loaded:
            ui.console.print(
                f"[dim]{plugin.name} ({plugin.target}): failed to load: {escape(plugin.error)}[/dim]"
            )


if __name__ == "__main__":
    app()
