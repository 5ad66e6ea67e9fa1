"""Building a ready-to-use registry from configuration.

This module delegates to lexicon.core.config_service for layered config
resolution. Importing it loads a ``.env`` file from the working directory,
so LEXICON_* variables can live there.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from lexicon.catalogs import CatalogProvider, get_provider
from lexicon.errors import ConfigError
from lexicon.models import Locale
from lexicon.registry import LocalizationRegistry

logger = logging.getLogger("lexicon.config")

load_dotenv(Path.cwd() / ".env")


def build_provider(
    name: Optional[str] = None,
    catalog_dir: Union[str, Path, None] = None,
) -> CatalogProvider:
    """Create the configured catalog provider.

    Args:
        name: Provider name; defaults to ``catalogs.provider``.
        catalog_dir: Directory for the YAML provider; defaults to
            ``catalogs.directory``.

    Raises:
        ConfigError: If the YAML provider has no directory configured.
    """
    from lexicon.core.config_service import get_config_service

    svc = get_config_service()
    name = name or svc.get_provider_name()
    if name != "yaml":
        return get_provider(name)

    root = Path(catalog_dir).expanduser() if catalog_dir else svc.get_catalog_dir()
    if root is None:
        raise ConfigError(
            "No catalog directory configured. Set LEXICON_CATALOG_DIR, "
            "pass --dir, or add catalogs.directory to .lexicon.toml."
        )
    return get_provider("yaml", root=root)


def create_registry(
    locale: Union[Locale, str, None] = None,
    provider: Optional[CatalogProvider] = None,
    catalog_dir: Union[str, Path, None] = None,
) -> LocalizationRegistry:
    """Build a registry with the configured locale and catalog sources.

    Args:
        locale: Locale (or tag) to activate; defaults to ``locale.default``.
        provider: Provider to use instead of the configured one.
        catalog_dir: Overrides ``catalogs.directory`` for the YAML provider.
    """
    from lexicon.core.config_service import get_config_service

    svc = get_config_service()
    default_locale = svc.get_default_locale()
    if provider is None:
        provider = build_provider(catalog_dir=catalog_dir)

    registry = LocalizationRegistry(provider, default_locale=default_locale)
    if locale is not None:
        target = locale if isinstance(locale, Locale) else Locale.parse(locale)
        registry.set_locale(target.language, target.country)

    for category, source_name in svc.get_catalog_sources().items():
        registry.set_catalog(category, source_name)
    logger.debug("Created %r", registry)
    return registry
