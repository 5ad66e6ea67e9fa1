"""Shell completion functions for the lexicon CLI."""
from __future__ import annotations


def complete_category(incomplete: str) -> list[str]:
    """Complete category names."""
    from lexicon.models import Category
    return [c.value for c in Category if c.value.startswith(incomplete.lower())]


def complete_locale(incomplete: str) -> list[str]:
    """Complete locale tags that have formatting data."""
    from babel.localedata import locale_identifiers
    return sorted(tag for tag in locale_identifiers() if tag.startswith(incomplete))
