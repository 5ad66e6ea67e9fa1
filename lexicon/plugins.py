"""Catalog providers contributed by other packages.

A package registers a provider class under the ``lexicon.providers`` entry
point group::

    [project.entry-points."lexicon.providers"]
    gettext = "lexicon_gettext:GettextProvider"

Once installed it is selected like a built-in one, with
``LEXICON_PROVIDER=gettext`` or ``catalogs.provider = "gettext"``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Optional

logger = logging.getLogger("lexicon.plugins")

PROVIDER_GROUP = "lexicon.providers"


@dataclass
class ProviderPlugin:
    """One ``lexicon.providers`` entry point and the outcome of loading it."""

    name: str
    target: str
    provider: Optional[type] = None
    error: str = ""

    @property
    def loaded(self) -> bool:
        return self.provider is not None


def load_provider_plugins() -> list[ProviderPlugin]:
    """Import every registered provider, keeping failures instead of raising.

    A plugin that cannot be imported is logged and reported with its error
    so ``lexicon providers`` can show it; it never breaks the built-ins.
    """
    plugins = []
    for ep in entry_points(group=PROVIDER_GROUP):
        plugin = ProviderPlugin(name=ep.name, target=ep.value)
        try:
            plugin.provider = ep.load()
        except Exception as e:
            logger.warning("Skipping catalog provider %s (%s): %s", ep.name, ep.value, e)
            plugin.error = str(e)
        else:
            logger.debug("Loaded catalog provider %s from %s", ep.name, ep.value)
        plugins.append(plugin)
    return plugins


def discover_providers() -> dict[str, type]:
    """Provider classes from every plugin that imported cleanly, by name."""
    return {plugin.name: plugin.provider for plugin in load_provider_plugins() if plugin.loaded}
