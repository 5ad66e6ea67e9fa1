"""Core data models: locales, catalog categories, and category bindings."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from lexicon.catalogs.base import Catalog


@dataclass(frozen=True)
class Locale:
    """A (language, country) pair.

    ``language`` is expected to be a lowercase ISO-639 code and ``country``
    an uppercase ISO-3166 code, but neither is validated: any strings are
    accepted and carried through to the catalog provider unchanged.
    """

    language: str
    country: str = ""

    @classmethod
    def parse(cls, tag: str) -> "Locale":
        """Build a Locale from a tag such as ``de_DE``, ``pt-BR`` or ``fr``.

        Encoding and modifier suffixes (``de_DE.UTF-8``, ``sr_RS@latin``)
        are dropped.
        """
        tag = tag.strip().split(".", 1)[0].split("@", 1)[0]
        language, _, country = tag.replace("-", "_").partition("_")
        return cls(language, country)

    @property
    def tag(self) -> str:
        """POSIX-style tag, e.g. ``en_US``; just the language when no country."""
        if self.country:
            return f"{self.language}_{self.country}"
        return self.language

    def candidates(self) -> list[str]:
        """Suffixes a provider searches, most specific first.

        The last entry is always the empty suffix, meaning the base catalog.
        """
        result = []
        if self.language and self.country:
            result.append(f"{self.language}_{self.country}")
        if self.language:
            result.append(self.language)
        result.append("")
        return result

    def __str__(self) -> str:
        return self.tag


DEFAULT_LOCALE = Locale("en", "US")


class Category(str, Enum):
    """The six catalog slots a registry manages."""

    BUTTONS = "buttons"
    LABELS = "labels"
    MENUS = "menus"
    ERRORS = "errors"
    MESSAGES = "messages"
    LOGS = "logs"

    @property
    def noun(self) -> str:
        """What a single entry of this category is called."""
        return _NOUNS[self]

    @property
    def env_var(self) -> str:
        return f"LEXICON_{self.name}_CATALOG"

    @classmethod
    def from_name(cls, name: str) -> "Category":
        """Look up a category by value or member name, case-insensitively."""
        lowered = name.strip().lower()
        for member in cls:
            if lowered in (member.value, member.name.lower()):
                return member
        raise ValueError(
            f"Unknown category '{name}'. Available: {', '.join(c.value for c in cls)}"
        )


_NOUNS = {
    Category.BUTTONS: "button label",
    Category.LABELS: "label",
    Category.MENUS: "menu label",
    Category.ERRORS: "error message",
    Category.MESSAGES: "message",
    Category.LOGS: "log message",
}


@dataclass(frozen=True)
class CatalogBinding:
    """A category paired with its source name and the catalog resolved from it.

    ``catalog`` is set only while ``source_name`` is set and has been
    resolved against the registry's current locale.
    """

    category: Category
    source_name: Optional[str] = None
    catalog: Optional["Catalog"] = None

    @property
    def is_bound(self) -> bool:
        return self.catalog is not None
