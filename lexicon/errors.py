"""Custom exception hierarchy for lexicon.

All lexicon-specific exceptions derive from LexiconError. Each exception
carries an optional ``context`` dict with structured metadata
(category, key, catalog name, locale, etc.) that the CLI error
handler can render.

Exception hierarchy::

    LexiconError
    ├── MessageNotFoundError
    │   └── CategoryUnboundError
    ├── CatalogResolutionError
    ├── MessageFormatError
    ├── ProviderUnavailableError
    └── ConfigError
"""
from __future__ import annotations

from typing import Optional


class LexiconError(Exception):
    """Base class for all lexicon exceptions.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured metadata.
    """

    exit_code: int = 1

    def __init__(self, message: str, context: Optional[dict] = None):
        self.context = context or {}
        super().__init__(message)


# ── Lookup Errors ──────────────────────────────────────────────────

class MessageNotFoundError(LexiconError, LookupError):
    """Raised when a key is absent from a resolved catalog."""

    def __init__(self, key: str, catalog: str = "", locale: str = ""):
        msg = f"Key '{key}' not found"
        if catalog:
            msg += f" in catalog '{catalog}'"
        if locale:
            msg += f" ({locale})"
        super().__init__(
            msg,
            context={"key": key, "catalog": catalog, "locale": locale},
        )
        self.key = key


class CategoryUnboundError(MessageNotFoundError):
    """Raised when a lookup targets a category with no catalog source set."""

    def __init__(self, category: str, key: str = ""):
        LexiconError.__init__(
            self,
            f"No catalog bound for category '{category}'",
            context={"category": category, "key": key},
        )
        self.key = key
        self.category = category


# ── Resolution Errors ──────────────────────────────────────────────

class CatalogResolutionError(LexiconError):
    """Raised when a provider cannot supply a catalog for a name and locale."""

    def __init__(self, catalog: str, locale: str = "", reason: str = ""):
        msg = f"Cannot resolve catalog '{catalog}'"
        if locale:
            msg += f" for locale {locale}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, context={"catalog": catalog, "locale": locale})
        self.catalog = catalog
        self.locale = locale


class ProviderUnavailableError(LexiconError):
    """Raised when a catalog provider name is unknown or cannot be built."""

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message, context={"provider": provider})


# ── Formatting Errors ──────────────────────────────────────────────

class MessageFormatError(LexiconError, ValueError):
    """Raised when a pattern is malformed or does not match its arguments."""

    def __init__(self, message: str, pattern: str = "", position: Optional[int] = None):
        super().__init__(
            message,
            context={"pattern": pattern, "position": position},
        )
        self.pattern = pattern
        self.position = position


class ConfigError(LexiconError):
    """Raised when configuration is invalid or missing."""
    pass
