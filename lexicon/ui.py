"""Shared console, theme, and display helpers for the lexicon CLI."""

import json

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme


def print_json_output(data: dict | list) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


# ── Theme ──
LEXICON_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "key": "bold blue",
    "locale": "magenta",
    "muted": "dim",
})

console = Console(theme=LEXICON_THEME)


def set_plain_mode() -> None:
    """Switch the shared console to plain text output (no colors)."""
    global console
    console = Console(theme=LEXICON_THEME, no_color=True, highlight=False)


def entries_table(title: str, entries: dict[str, str]) -> Table:
    """A two-column key/value table for catalog entries.

    Cells are plain Text so brackets in catalog strings are not read as markup.
    """
    table = Table(title=Text(title), show_header=True)
    table.add_column("Key", style="key")
    table.add_column("Value")
    for key, value in entries.items():
        table.add_row(Text(key), Text(value))
    return table
