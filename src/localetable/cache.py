"""
Locale table cache.

Holds one finished table per locale ever built and answers lookups.
Tables are immutable once stored: the mapping handed out is a
read-only view, so lookups need no locking.

Lookup fallback chain for get(key):
    active locale's table -> last table served -> raw key
and with an explicit locale:
    that locale's table -> default locale's table -> last table served -> raw key
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import structlog

from .registry import KeyRegistry

logger = structlog.get_logger()


@dataclass(frozen=True)
class LocaleTable:
    """Published key -> value table for one locale."""

    locale: str
    entries: Mapping[str, str]

    @classmethod
    def build(cls, locale: str, values: Mapping[str, str]) -> "LocaleTable":
        return cls(locale=locale, entries=MappingProxyType(dict(values)))

    def get(self, key: str) -> str:
        """Return the value for key, or the key itself if it is unknown."""
        return self.entries.get(key, key)

    def host_entries(self, registry: KeyRegistry) -> dict[str, str]:
        """Re-key the table by the IDs the host knows each key by."""
        return {registry.host_id(key): value for key, value in self.entries.items()}

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class LocaleTableCache:
    """Per-locale table store with an "active locale" pointer.

    Usage:
        cache = LocaleTableCache(default_locale="en-US")
        cache.activate("fr-FR")
        if not cache.is_built("fr-FR"):
            cache.store(LocaleTable.build("fr-FR", values))
        cache.get("Title")
    """

    def __init__(self, default_locale: str) -> None:
        self.default_locale = default_locale
        self._tables: dict[str, LocaleTable] = {}
        self._active: str | None = None
        self._serving: str | None = None

    @property
    def active_locale(self) -> str | None:
        return self._active

    @property
    def serving_locale(self) -> str | None:
        """Locale whose table currently answers get() calls without a locale."""
        return self._serving

    @property
    def built_locales(self) -> list[str]:
        return list(self._tables)

    def activate(self, locale: str) -> None:
        """Point lookups at locale. An unbuilt locale keeps the old table serving."""
        self._active = locale
        if locale in self._tables:
            self._serving = locale

    def is_built(self, locale: str) -> bool:
        return locale in self._tables

    def table(self, locale: str) -> LocaleTable | None:
        return self._tables.get(locale)

    def store(self, table: LocaleTable) -> None:
        """Mark table.locale as built. A stored table is never replaced."""
        if table.locale in self._tables:
            logger.debug("table_cache_store_ignored", locale=table.locale)
            return
        self._tables[table.locale] = table
        if table.locale == self._active or self._serving is None:
            self._serving = table.locale
        logger.debug("table_cached", locale=table.locale, keys=len(table))

    def get(self, key: str, locale: str | None = None) -> str:
        """Resolve key. Never raises; worst case returns the key itself."""
        if locale is None:
            chain = [self._active, self._serving]
        else:
            chain = [locale, self.default_locale, self._serving]

        for candidate in chain:
            if candidate is not None and candidate in self._tables:
                return self._tables[candidate].get(key)
        return key

    def clear(self) -> int:
        """Drop every table. Returns the number of tables dropped."""
        dropped = len(self._tables)
        self._tables.clear()
        self._serving = None
        return dropped
