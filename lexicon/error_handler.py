"""Unified CLI error handler for lexicon commands."""

from __future__ import annotations

import functools
import logging
import os
import traceback

import click
import typer
from rich.markup import escape

from lexicon import ui
from lexicon.errors import (
    CatalogResolutionError,
    CategoryUnboundError,
    ConfigError,
    LexiconError,
    MessageFormatError,
    MessageNotFoundError,
    ProviderUnavailableError,
)
from lexicon.models import Category

logger = logging.getLogger("lexicon.error_handler")


def _debug_mode() -> bool:
    """Check if debug output is enabled via LEXICON_DEBUG env var."""
    return os.environ.get("LEXICON_DEBUG", "").lower() in ("1", "true", "yes")


def _render_lexicon_error(e: LexiconError) -> None:
    """Render a LexiconError with Rich formatting and context."""
    console = ui.console
    console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")

    if e.context and _debug_mode():
        context_parts = [
            f"  [dim]{key}:[/dim] {escape(str(value))}" for key, value in e.context.items() if value is not None and value != ""
        ]
        if context_parts:
            console.print("[dim]Context:[/dim]")
            for part in context_parts:
                console.print(part)

    # Actionable hints based on error type
    if isinstance(e, CategoryUnboundError):
        console.print(f"[dim]{_unbound_hint(e.category)}[/dim]")
    elif isinstance(e, MessageNotFoundError):
        console.print("[dim]Run 'lexicon show <category>' to list available keys.[/dim]")
    elif isinstance(e, CatalogResolutionError):
        console.print("[dim]Run 'lexicon config path' to check the catalog directory.[/dim]")
    elif isinstance(e, MessageFormatError):
        console.print("[dim]Check the placeholders in the pattern against the arguments given.[/dim]")
    elif isinstance(e, ProviderUnavailableError):
        console.print("[dim]Run 'lexicon providers' to see installed catalog providers.[/dim]")
    elif isinstance(e, ConfigError):
        console.print("[dim]Run 'lexicon config show' to inspect the resolved configuration.[/dim]")


def _unbound_hint(category_name: str) -> str:
    try:
        category = Category.from_name(category_name)
    except ValueError:
        return "Pass --catalog or set LEXICON_<CATEGORY>_CATALOG."
    return f"No {category.noun} catalog is set. Pass --catalog or set {category.env_var}."


def handle_errors(func):
    """Decorator that catches LexiconError and renders formatted CLI output.

    Usage::

        @app.command()
        @handle_errors
        def my_command(...):
            ...  # no try/except needed
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LexiconError as e:
            _render_lexicon_error(e)
            if _debug_mode():
                ui.console.print(f"\n[dim]{escape(traceback.format_exc())}[/dim]")
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            ui.console.print("\n[dim]Interrupted.[/dim]")
            raise typer.Exit(130)
        except (typer.Exit, typer.Abort, click.ClickException, SystemExit):
            raise
        except Exception as e:
            logger.debug("Unexpected error in %s", func.__name__, exc_info=True)
            ui.console.print(f"\n[bold red]Unexpected error:[/bold red] {escape(str(e))}")
            if _debug_mode():
                ui.console.print(f"\n[dim]{escape(traceback.format_exc())}[/dim]")
            else:
                ui.console.print("[dim]Set LEXICON_DEBUG=1 for full traceback.[/dim]")
            raise typer.Exit(1)

    return wrapper
