"""Catalog provider reading YAML files from a directory tree.

A catalog named ``app.buttons`` resolved for ``de_DE`` is assembled from
whichever of these exist, most specific first::

    <root>/app/buttons_de_DE.yaml
    <root>/app/buttons_de.yaml
    <root>/app/buttons.yaml

Keys missing from a specific file fall through to the less specific ones.
Nested mappings are flattened to dotted keys::

    dialog:
      save: Save      # -> "dialog.save"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from lexicon.catalogs.base import MappingCatalog, chain_catalogs
from lexicon.errors import CatalogResolutionError
from lexicon.models import Locale

logger = logging.getLogger("lexicon.catalogs")

EXTENSIONS = (".yaml", ".yml")


class YamlDirectoryProvider:
    """Provider for YAML catalogs stored under ``root``."""

    name = "yaml"

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser()

    def catalog_path(self, name: str, suffix: str = "") -> Optional[Path]:
        """Return the file backing ``name`` for a candidate suffix, if any."""
        *package, base = name.split(".")
        directory = self.root.joinpath(*package)
        stem = f"{base}_{suffix}" if suffix else base
        for ext in EXTENSIONS:
            path = directory / f"{stem}{ext}"
            if path.is_file():
                return path
        return None

    def provide(self, name: str, locale: Locale) -> MappingCatalog:
        if not name or any(not part for part in name.split(".")):
            raise CatalogResolutionError(name, locale.tag, reason="invalid catalog name")

        layers = []
        for suffix in reversed(locale.candidates()):
            path = self.catalog_path(name, suffix)
            if path is None:
                continue
            layers.append((suffix, _load_entries(path, name, locale)))
            logger.debug("Loaded %s for catalog %s", path, name)

        if not layers:
            raise CatalogResolutionError(
                name, locale.tag, reason=f"no catalog files under {self.root}"
            )
        return chain_catalogs(name, locale, layers)

    def available_locales(self, name: str) -> list[str]:
        """Locale suffixes that have a file for ``name`` (excluding the base)."""
        *package, base = name.split(".")
        directory = self.root.joinpath(*package)
        if not directory.is_dir():
            return []
        found = set()
        for ext in EXTENSIONS:
            for path in directory.glob(f"{base}_*{ext}"):
                found.add(path.stem[len(base) + 1:])
        return sorted(found)

    def __repr__(self) -> str:
        return f"YamlDirectoryProvider(root={str(self.root)!r})"


def _load_entries(path: Path, name: str, locale: Locale) -> dict[str, str]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise CatalogResolutionError(name, locale.tag, reason=f"{path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CatalogResolutionError(
            name, locale.tag, reason=f"{path}: top level must be a mapping"
        )
    try:
        return flatten(data)
    except TypeError as e:
        raise CatalogResolutionError(name, locale.tag, reason=f"{path}: {e}") from e


def flatten(data: dict, prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted keys with string values."""
    result: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            result.update(flatten(value, full_key))
        elif isinstance(value, (list, tuple, set)):
            raise TypeError(f"value for '{full_key}' must be a string, not a list")
        elif value is None:
            result[full_key] = ""
        elif isinstance(value, bool):
            # YAML reads yes/no/on/off as booleans
            result[full_key] = "true" if value else "false"
        else:
            result[full_key] = str(value)
    return result
