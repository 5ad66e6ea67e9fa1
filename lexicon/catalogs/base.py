"""Catalog and CatalogProvider protocols, plus the dict-backed catalog."""

from __future__ import annotations

from typing import Iterator, Mapping, Optional, Protocol, runtime_checkable

from lexicon.errors import MessageNotFoundError
from lexicon.models import Locale


@runtime_checkable
class Catalog(Protocol):
    """A key to localized string mapping for one category and one locale."""

    def lookup(self, key: str) -> str: ...


@runtime_checkable
class CatalogProvider(Protocol):
    """Supplies catalogs by name and locale.

    ``provide`` raises CatalogResolutionError when it has no catalog for
    the pair.
    """

    def provide(self, name: str, locale: Locale) -> Catalog: ...


class MappingCatalog:
    """Catalog backed by a plain dict.

    Keys missing here are looked up in ``parent``, which providers use to
    chain ``de_DE`` -> ``de`` -> base catalogs. ``source`` records which
    candidate suffix the entries came from (``""`` for the base catalog).
    """

    def __init__(
        self,
        name: str,
        locale: Optional[Locale],
        entries: Mapping[str, str],
        parent: Optional["MappingCatalog"] = None,
        source: Optional[str] = None,
    ):
        self.name = name
        self.locale = locale
        self.parent = parent
        self.source = (locale.tag if locale else "") if source is None else source
        self._entries = dict(entries)

    def lookup(self, key: str) -> str:
        for layer in self.layers():
            if key in layer._entries:
                return layer._entries[key]
        raise MessageNotFoundError(key, catalog=self.name, locale=self._locale_tag())

    def layers(self) -> Iterator["MappingCatalog"]:
        """This catalog followed by its parents, most specific first."""
        catalog: Optional[MappingCatalog] = self
        while catalog is not None:
            yield catalog
            catalog = catalog.parent

    def keys(self) -> list[str]:
        """All keys reachable from this catalog, sorted."""
        found: set[str] = set()
        for layer in self.layers():
            found.update(layer._entries)
        return sorted(found)

    def localized_keys(self) -> list[str]:
        """Keys supplied by a locale-specific layer rather than the base."""
        found: set[str] = set()
        for layer in self.layers():
            if layer.source:
                found.update(layer._entries)
        return sorted(found)

    def to_dict(self) -> dict[str, str]:
        return {key: self.lookup(key) for key in self.keys()}

    def _locale_tag(self) -> str:
        return self.locale.tag if self.locale else ""

    def __contains__(self, key: object) -> bool:
        return any(key in layer._entries for layer in self.layers())

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())

    def __repr__(self) -> str:
        return (
            f"MappingCatalog(name={self.name!r}, locale={self._locale_tag()!r}, "
            f"source={self.source!r}, entries={len(self._entries)})"
        )


def chain_catalogs(
    name: str,
    locale: Locale,
    layers: list[tuple[str, Mapping[str, str]]],
) -> MappingCatalog:
    """Link candidate layers (least specific first) into one catalog.

    Each layer is a ``(suffix, entries)`` pair as produced by walking
    ``Locale.candidates()`` in reverse. The returned catalog reports the
    requested locale whichever layer it was built from.
    """
    catalog: Optional[MappingCatalog] = None
    for suffix, entries in layers:
        layer_locale = Locale.parse(suffix) if suffix else None
        catalog = MappingCatalog(name, layer_locale, entries, parent=catalog, source=suffix)
    if catalog is None:
        raise ValueError("chain_catalogs() needs at least one layer")
    catalog.locale = locale
    return catalog
