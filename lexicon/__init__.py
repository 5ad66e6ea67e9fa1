"""lexicon: locale-aware catalog lookup and message formatting."""

from lexicon.catalogs import (
    Catalog,
    CatalogProvider,
    InMemoryProvider,
    MappingCatalog,
    YamlDirectoryProvider,
    get_provider,
)
from lexicon.errors import (
    CatalogResolutionError,
    CategoryUnboundError,
    ConfigError,
    LexiconError,
    MessageFormatError,
    MessageNotFoundError,
    ProviderUnavailableError,
)
from lexicon.formatting import MessageFormatter, format_message
from lexicon.models import DEFAULT_LOCALE, CatalogBinding, Category, Locale
from lexicon.registry import LocalizationRegistry

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "CatalogBinding",
    "CatalogProvider",
    "CatalogResolutionError",
    "Category",
    "CategoryUnboundError",
    "ConfigError",
    "DEFAULT_LOCALE",
    "InMemoryProvider",
    "LexiconError",
    "Locale",
    "LocalizationRegistry",
    "MappingCatalog",
    "MessageFormatError",
    "MessageFormatter",
    "MessageNotFoundError",
    "ProviderUnavailableError",
    "YamlDirectoryProvider",
    "format_message",
    "get_provider",
]
