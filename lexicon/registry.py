"""Locale-aware registry of the six text catalogs an application uses.

Usage::

    from lexicon import Category, LocalizationRegistry, YamlDirectoryProvider

    registry = LocalizationRegistry(YamlDirectoryProvider("resources/i18n"))
    registry.set_labels_catalog("app.labels")
    registry.set_locale("de", "DE")

    registry.get_label("file.title")                   # verbatim
    registry.get_message("items.count", "Ann", 3)      # formatted

Catalogs are resolved eagerly: whenever a category's source or the locale
changes, the affected catalogs are fetched from the provider again. Lookups
only read what was resolved.

The registry holds no locks. Applications that share one between threads
must serialize calls themselves.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from lexicon.catalogs.base import Catalog, CatalogProvider
from lexicon.errors import CatalogResolutionError, CategoryUnboundError, LexiconError, MessageNotFoundError
from lexicon.formatting import MessageFormatter
from lexicon.models import DEFAULT_LOCALE, CatalogBinding, Category, Locale

logger = logging.getLogger("lexicon.registry")


class LocalizationRegistry:
    """Holds the current locale and one catalog binding per Category.

    Args:
        provider: Supplies catalogs by name and locale. Defaults to an
            empty InMemoryProvider.
        default_locale: Locale established by ``ensure_initialized()``
            when none was set explicitly.
    """

    def __init__(
        self,
        provider: Optional[CatalogProvider] = None,
        default_locale: Locale = DEFAULT_LOCALE,
    ):
        if provider is None:
            from lexicon.catalogs.memory import InMemoryProvider
            provider = InMemoryProvider()
        self.provider = provider
        self.default_locale = default_locale
        self._locale: Optional[Locale] = None
        self._bindings: dict[Category, CatalogBinding] = {
            category: CatalogBinding(category) for category in Category
        }

    # ── Locale state ───────────────────────────────────────────────

    @property
    def is_initialized(self) -> bool:
        """True once a locale has been set, explicitly or by default."""
        return self._locale is not None

    def ensure_initialized(self) -> Locale:
        """Establish the default locale if none was ever set.

        This resolves every category that already has a source, so it can
        raise CatalogResolutionError.
        """
        if self._locale is None:
            logger.debug("No locale set, defaulting to %s", self.default_locale.tag)
            self.set_locale(self.default_locale.language, self.default_locale.country)
        return self._locale

    def get_locale(self) -> Locale:
        """Return the current locale, establishing the default on first use."""
        return self.ensure_initialized()

    def set_locale(self, language: str, country: str) -> Locale:
        """Switch to a new locale and re-resolve every bound category.

        Either every bound category resolves for the new locale and the
        switch happens, or CatalogResolutionError propagates and the
        previous locale and catalogs stay in effect.
        """
        locale = Locale(language, country)
        staged = {
            category: CatalogBinding(category, binding.source_name, self.resolve(binding.source_name, locale))
            for category, binding in self._bindings.items()
            if binding.source_name is not None
        }
        self._locale = locale
        self._bindings.update(staged)
        logger.debug("Locale set to %s (%d catalogs resolved)", locale.tag, len(staged))
        return locale

    # ── Catalog resolution ─────────────────────────────────────────

    def resolve(self, name: str, locale: Locale) -> Catalog:
        """Fetch catalog ``name`` for ``locale`` from the provider.

        Subclasses may override this to substitute catalogs. Errors other
        than LexiconError are wrapped in CatalogResolutionError.
        """
        try:
            catalog = self.provider.provide(name, locale)
        except LexiconError:
            raise
        except Exception as e:
            raise CatalogResolutionError(name, locale.tag, reason=str(e)) from e
        logger.debug("Resolved catalog %s for %s", name, locale.tag)
        return catalog

    # ── Bindings ───────────────────────────────────────────────────

    def set_catalog(self, category: Category, source_name: Optional[str]) -> CatalogBinding:
        """Bind ``category`` to catalog ``source_name``, or unbind it with None.

        The catalog is resolved immediately against the current locale,
        which may first establish the default locale. On failure the
        previous binding is kept.
        """
        category = Category(category)
        if source_name is None:
            binding = CatalogBinding(category)
        else:
            catalog = self.resolve(source_name, self.get_locale())
            binding = CatalogBinding(category, source_name, catalog)
        self._bindings[category] = binding
        logger.debug("Bound %s to %s", category.value, source_name)
        return binding

    def binding(self, category: Category) -> CatalogBinding:
        return self._bindings[Category(category)]

    def bindings(self) -> list[CatalogBinding]:
        """All six bindings, in category order."""
        return [self._bindings[category] for category in Category]

    def set_buttons_catalog(self, source_name: Optional[str]) -> CatalogBinding:
        return self.set_catalog(Category.BUTTONS, source_name)

    def set_labels_catalog(self, source_name: Optional[str]) -> CatalogBinding:
        return self.set_catalog(Category.LABELS, source_name)

    def set_menus_catalog(self, source_name: Optional[str]) -> CatalogBinding:
        return self.set_catalog(Category.MENUS, source_name)

    def set_errors_catalog(self, source_name: Optional[str]) -> CatalogBinding:
        return self.set_catalog(Category.ERRORS, source_name)

    def set_messages_catalog(self, source_name: Optional[str]) -> CatalogBinding:
        return self.set_catalog(Category.MESSAGES, source_name)

    def set_logs_catalog(self, source_name: Optional[str]) -> CatalogBinding:
        return self.set_catalog(Category.LOGS, source_name)

    # ── Lookup ─────────────────────────────────────────────────────

    def get(self, category: Category, key: str, *arguments: Any) -> str:
        """Look up ``key`` in ``category``, formatting it when arguments are given.

        Without arguments the string is returned verbatim. With arguments
        it is treated as a pattern and formatted for the current locale.

        Raises:
            CategoryUnboundError: The category has no catalog.
            MessageNotFoundError: The catalog has no such key.
            MessageFormatError: The pattern is malformed or does not match
                the arguments.
        """
        binding = self._bindings[Category(category)]
        if binding.catalog is None:
            raise CategoryUnboundError(binding.category.value, key)
        text = binding.catalog.lookup(key)
        if not arguments:
            return text
        return MessageFormatter(self.get_locale()).format(text, arguments)

    def contains(self, category: Category, key: str) -> bool:
        """True when ``category`` is bound and its catalog has ``key``."""
        catalog = self._bindings[Category(category)].catalog
        if catalog is None:
            return False
        try:
            catalog.lookup(key)
        except MessageNotFoundError:
            return False
        return True

    def get_button_label(self, key: str, *arguments: Any) -> str:
        return self.get(Category.BUTTONS, key, *arguments)

    def get_label(self, key: str, *arguments: Any) -> str:
        return self.get(Category.LABELS, key, *arguments)

    def get_menu_label(self, key: str, *arguments: Any) -> str:
        return self.get(Category.MENUS, key, *arguments)

    def get_error(self, key: str, *arguments: Any) -> str:
        return self.get(Category.ERRORS, key, *arguments)

    def get_message(self, key: str, *arguments: Any) -> str:
        return self.get(Category.MESSAGES, key, *arguments)

    def get_log_message(self, key: str, *arguments: Any) -> str:
        return self.get(Category.LOGS, key, *arguments)

    def __repr__(self) -> str:
        bound = [b.category.value for b in self.bindings() if b.is_bound]
        locale = self._locale.tag if self._locale else None
        return f"LocalizationRegistry(locale={locale!r}, bound={bound})"
