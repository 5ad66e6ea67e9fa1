"""Layered configuration service for lexicon.

Priority (highest to lowest):
1. Environment variables (LEXICON_*)
2. Project config (.lexicon.toml in current directory)
3. Global config (~/.config/lexicon/config.toml)
4. Built-in defaults
"""
from __future__ import annotations

import copy
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import tomli_w

from lexicon.errors import ConfigError
from lexicon.models import Category, Locale

logger = logging.getLogger("lexicon.config")


# Default configuration values
DEFAULTS: dict[str, Any] = {
    "locale": {
        "default": "en_US",
    },
    "catalogs": {
        "provider": "yaml",
        "directory": "",
        **{category.value: "" for category in Category},
    },
}

# Mapping of env vars to config paths
ENV_VAR_MAP = {
    "LEXICON_LOCALE": "locale.default",
    "LEXICON_PROVIDER": "catalogs.provider",
    "LEXICON_CATALOG_DIR": "catalogs.directory",
    **{category.env_var: f"catalogs.{category.value}" for category in Category},
}


def _global_config_dir() -> Path:
    """Return the global config directory: ~/.config/lexicon/."""
    return Path.home() / ".config" / "lexicon"


def _global_config_path() -> Path:
    return _global_config_dir() / "config.toml"


def _project_config_path() -> Path:
    """Return the project config file path (.lexicon.toml in cwd)."""
    return Path.cwd() / ".lexicon.toml"


def _read_toml(path: Path) -> dict:
    """Read a TOML file, returning empty dict if missing or unreadable."""
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return {}


def _write_toml(data: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        tomli_w.dump(data, f)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base (override wins)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _get_nested(data: dict, dotted_key: str, default: Any = None) -> Any:
    """Get a value from a nested dict using dotted key notation."""
    current = data
    for key in dotted_key.split("."):
        if not isinstance(current, dict):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def _set_nested(data: dict, dotted_key: str, value: Any) -> None:
    """Set a value in a nested dict using dotted key notation."""
    keys = dotted_key.split(".")
    current = data
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


@dataclass
class ResolvedConfig:
    """Fully resolved configuration after merging all layers."""
    data: dict = field(default_factory=dict)
    global_config_path: Optional[Path] = None
    project_config_path: Optional[Path] = None

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return _get_nested(self.data, dotted_key, default)


class ConfigService:
    """Layered configuration service.

    Resolves config from multiple sources with clear precedence:
    1. Environment variables (LEXICON_*)
    2. Project config (.lexicon.toml)
    3. Global config (~/.config/lexicon/config.toml)
    4. Built-in defaults
    """

    def __init__(self):
        self._resolved: Optional[ResolvedConfig] = None

    def resolve(self, force: bool = False) -> ResolvedConfig:
        """Resolve the full config from all layers."""
        if self._resolved is not None and not force:
            return self._resolved

        merged = copy.deepcopy(DEFAULTS)

        global_path = _global_config_path()
        global_data = _read_toml(global_path)
        if global_data:
            merged = _deep_merge(merged, global_data)
            logger.debug("Loaded global config from %s", global_path)

        project_path = _project_config_path()
        project_data = _read_toml(project_path)
        if project_data:
            merged = _deep_merge(merged, project_data)
            logger.debug("Loaded project config from %s", project_path)

        for env_var, config_path in ENV_VAR_MAP.items():
            env_value = os.environ.get(env_var)
            if env_value is not None:
                _set_nested(merged, config_path, env_value)

        self._resolved = ResolvedConfig(
            data=merged,
            global_config_path=global_path if global_path.is_file() else None,
            project_config_path=project_path if project_path.is_file() else None,
        )
        return self._resolved

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return self.resolve().get(dotted_key, default)

    def get_default_locale(self) -> Locale:
        """The configured default locale, e.g. ``de_DE`` -> Locale("de", "DE")."""
        tag = self.get("locale.default", "")
        if not isinstance(tag, str) or not tag.strip():
            raise ConfigError(f"Invalid locale.default value: {tag!r}")
        return Locale.parse(tag)

    def get_provider_name(self) -> str:
        return self.get("catalogs.provider", "yaml")

    def get_catalog_dir(self) -> Optional[Path]:
        """The YAML catalog directory, relative paths resolved against cwd."""
        directory = self.get("catalogs.directory", "")
        if not directory:
            return None
        return Path(directory).expanduser().resolve()

    def get_catalog_sources(self) -> dict[Category, str]:
        """Configured catalog source name per category (unset ones omitted)."""
        sources = {}
        for category in Category:
            name = self.get(f"catalogs.{category.value}", "")
            if name:
                sources[category] = str(name)
        return sources

    def set_global(self, dotted_key: str, value: Any) -> None:
        """Set a value in the global config file."""
        path = _global_config_path()
        data = _read_toml(path)
        _set_nested(data, dotted_key, value)
        _write_toml(data, path)
        self._resolved = None
        logger.info("Set %s = %s in %s", dotted_key, value, path)

    def init_project_config(self, catalog_dir: str = "./i18n") -> Path:
        """Create a .lexicon.toml in the current directory with defaults."""
        path = _project_config_path()
        if path.exists():
            raise FileExistsError(f"Project config already exists: {path}")

        data = {
            "locale": {"default": "en_US"},
            "catalogs": {
                "provider": "yaml",
                "directory": catalog_dir,
            },
        }
        _write_toml(data, path)
        self._resolved = None
        logger.info("Created project config: %s", path)
        return path

    def show(self) -> dict:
        """Return the resolved config and the files it came from."""
        resolved = self.resolve(force=True)
        return {
            "resolved": resolved.data,
            "sources": {
                "global_config": str(resolved.global_config_path) if resolved.global_config_path else None,
                "project_config": str(resolved.project_config_path) if resolved.project_config_path else None,
            },
        }

    def config_paths(self) -> dict[str, str]:
        """Return all config file locations and their existence status."""
        global_path = _global_config_path()
        project_path = _project_config_path()
        paths = {
            "global_config": f"{global_path} ({'exists' if global_path.is_file() else 'not found'})",
            "project_config": f"{project_path} ({'exists' if project_path.is_file() else 'not found'})",
        }
        catalog_dir = self.get_catalog_dir()
        if catalog_dir is not None:
            paths["catalog_dir"] = f"{catalog_dir} ({'exists' if catalog_dir.is_dir() else 'not found'})"
        return paths


# Module-level singleton
_config_service: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """Get or create the global ConfigService instance."""
    global _config_service
    if _config_service is None:
        _config_service = ConfigService()
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (useful for testing)."""
    global _config_service
    _config_service = None
