"""Catalog providers and provider dispatch.

Built-in providers (``memory``, ``yaml``) are always available. Third-party
packages add providers through the ``lexicon.providers`` entry point group.
"""
from __future__ import annotations

import logging
from typing import Any

from lexicon.catalogs.base import Catalog, CatalogProvider, MappingCatalog, chain_catalogs
from lexicon.catalogs.memory import InMemoryProvider
from lexicon.catalogs.yaml_provider import YamlDirectoryProvider
from lexicon.errors import ProviderUnavailableError

logger = logging.getLogger("lexicon.catalogs")

BUILTIN_PROVIDERS: dict[str, type] = {
    "memory": InMemoryProvider,
    "yaml": YamlDirectoryProvider,
}

# Built-ins plus anything discovered via entry points (lazy-loaded)
PROVIDERS: dict[str, type] = {}


def _register_defaults() -> None:
    if PROVIDERS:
        return

    from lexicon.plugins import discover_providers

    PROVIDERS.update(BUILTIN_PROVIDERS)
    discovered = discover_providers()
    for name, provider_cls in discovered.items():
        if name in BUILTIN_PROVIDERS:
            continue
        PROVIDERS[name] = provider_cls
    logger.debug("Registered catalog providers: %s", sorted(PROVIDERS))


def get_provider(name: str, **options: Any) -> CatalogProvider:
    """Instantiate a catalog provider by name.

    Args:
        name: Provider name (``memory``, ``yaml``, or a plugin name).
        **options: Keyword arguments passed to the provider's constructor,
            e.g. ``root`` for the YAML provider.

    Raises:
        ProviderUnavailableError: If the name is unknown or the provider
            cannot be constructed with the given options.
    """
    _register_defaults()
    if name not in PROVIDERS:
        available = ", ".join(sorted(PROVIDERS))
        raise ProviderUnavailableError(
            f"Unknown catalog provider '{name}'. Available: {available}",
            provider=name,
        )
    try:
        return PROVIDERS[name](**options)
    except TypeError as e:
        raise ProviderUnavailableError(
            f"Cannot create catalog provider '{name}': {e}", provider=name
        ) from e


def get_provider_names() -> list[str]:
    """Sorted list of all registered provider names."""
    _register_defaults()
    return sorted(PROVIDERS)


def reset_providers() -> None:
    """Forget discovered providers (useful when entry points change)."""
    PROVIDERS.clear()


__all__ = [
    "Catalog",
    "CatalogProvider",
    "InMemoryProvider",
    "MappingCatalog",
    "YamlDirectoryProvider",
    "chain_catalogs",
    "get_provider",
    "get_provider_names",
    "reset_providers",
]
