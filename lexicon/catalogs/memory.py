"""In-memory catalog provider."""

from __future__ import annotations

import logging
from typing import Mapping, Union

from lexicon.catalogs.base import MappingCatalog, chain_catalogs
from lexicon.errors import CatalogResolutionError
from lexicon.models import Locale

logger = logging.getLogger("lexicon.catalogs")


class InMemoryProvider:
    """Provider holding catalogs registered at runtime.

    Usage::

        provider = InMemoryProvider()
        provider.add("app.labels", None, {"ok": "OK"})
        provider.add("app.labels", "de_DE", {"ok": "Gut"})
        registry = LocalizationRegistry(provider)
    """

    name = "memory"

    def __init__(self):
        self._catalogs: dict[tuple[str, str], dict[str, str]] = {}
        self.calls: list[tuple[str, Locale]] = []

    def add(
        self,
        name: str,
        locale: Union[Locale, str, None],
        entries: Mapping[str, str],
    ) -> None:
        """Register (or extend) the entries of ``name`` for ``locale``.

        ``locale`` may be a Locale, a tag such as ``"de"`` or ``"de_DE"``,
        or None for the base catalog.
        """
        suffix = _suffix(locale)
        self._catalogs.setdefault((name, suffix), {}).update(
            {str(k): str(v) for k, v in entries.items()}
        )

    def remove(self, name: str, locale: Union[Locale, str, None] = None) -> None:
        self._catalogs.pop((name, _suffix(locale)), None)

    def names(self) -> list[str]:
        return sorted({name for name, _ in self._catalogs})

    def provide(self, name: str, locale: Locale) -> MappingCatalog:
        self.calls.append((name, locale))
        layers = [
            (suffix, self._catalogs[(name, suffix)])
            for suffix in reversed(locale.candidates())
            if (name, suffix) in self._catalogs
        ]
        if not layers:
            raise CatalogResolutionError(
                name, locale.tag, reason="no catalog registered"
            )
        logger.debug(
            "Resolved in-memory catalog %s for %s from %s",
            name, locale.tag, [s or "<base>" for s, _ in layers],
        )
        return chain_catalogs(name, locale, layers)


def _suffix(locale: Union[Locale, str, None]) -> str:
    if locale is None:
        return ""
    if isinstance(locale, Locale):
        return locale.tag
    return Locale.parse(locale).tag if locale else ""
