"""CLI commands that read catalogs: lookup, show, check."""
from __future__ import annotations

import re
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import typer
from rich.markup import escape

from lexicon import ui
from lexicon.error_handler import handle_errors
from lexicon.errors import LexiconError
from lexicon.models import Category, Locale

_INT_RE = re.compile(r"-?\d+")
_DECIMAL_RE = re.compile(r"-?\d*\.\d+")


def coerce_argument(value: str) -> Any:
    """Turn numeric-looking CLI arguments into numbers for locale formatting."""
    if _INT_RE.fullmatch(value):
        return int(value)
    if _DECIMAL_RE.fullmatch(value):
        return Decimal(value)
    return value


def _parse_category(name: str) -> Category:
    try:
        return Category.from_name(name)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="CATEGORY")


def _open_registry(
    category: Category,
    locale: Optional[str],
    catalog: Optional[str],
    catalog_dir: Optional[Path],
):
    from lexicon.config import create_registry

    registry = create_registry(locale=locale, catalog_dir=catalog_dir)
    if catalog:
        registry.set_catalog(category, catalog)
    return registry


@handle_errors
def lookup(
    category: str,
    key: str,
    arguments: list[str],
    locale: Optional[str] = None,
    catalog: Optional[str] = None,
    catalog_dir: Optional[Path] = None,
    raw: bool = False,
) -> None:
    """Print one (optionally formatted) string."""
    cat = _parse_category(category)
    registry = _open_registry(cat, locale, catalog, catalog_dir)
    args = arguments if raw else [coerce_argument(a) for a in arguments]
    text = registry.get(cat, key, *args)
    # print() keeps brackets in catalog text away from rich markup
    print(text)


@handle_errors
def show(
    category: str,
    locale: Optional[str] = None,
    catalog: Optional[str] = None,
    catalog_dir: Optional[Path] = None,
    as_json: bool = False,
) -> None:
    """Print every key of the catalog bound to a category."""
    cat = _parse_category(category)
    registry = _open_registry(cat, locale, catalog, catalog_dir)
    binding = registry.binding(cat)
    if binding.catalog is None:
        from lexicon.errors import CategoryUnboundError
        raise CategoryUnboundError(cat.value)

    keys = getattr(binding.catalog, "keys", None)
    if keys is None:
        raise LexiconError(
            f"Catalog '{binding.source_name}' cannot list its keys",
            context={"catalog": binding.source_name},
        )
    entries = {key: binding.catalog.lookup(key) for key in keys()}

    if as_json:
        ui.print_json_output(entries)
        return
    title = f"{binding.source_name} ({registry.get_locale().tag})"
    ui.console.print(ui.entries_table(title, entries))


@handle_errors
def check(
    catalog: str,
    locales: list[str],
    catalog_dir: Optional[Path] = None,
) -> None:
    """Report base-catalog keys that a locale does not translate."""
    from lexicon.config import build_provider

    provider = build_provider(catalog_dir=catalog_dir)
    base = provider.provide(catalog, Locale(""))
    base_keys = set(base.keys())

    if not locales:
        available = getattr(provider, "available_locales", None)
        locales = available(catalog) if available else []
    if not locales:
        ui.console.print(f"[warning]No localized variants found for {catalog}.[/warning]")
        return

    any_missing = False
    for tag in locales:
        localized = provider.provide(catalog, Locale.parse(tag))
        translated = set(getattr(localized, "localized_keys", localized.keys)())
        missing = sorted(base_keys - translated)
        if missing:
            any_missing = True
            ui.console.print(f"[locale]{tag}[/locale]: [error]{len(missing)} missing[/error]")
            for key in missing:
                ui.console.print(f"  [key]{escape(key)}[/key]")
        else:
            ui.console.print(f"[locale]{tag}[/locale]: [success]complete[/success]")

    if any_missing:
        raise typer.Exit(1)
