"""
Host-side collaborators of the loader.

- HostDictionary: the host application's own translations, consulted
  by '$$' pass-through values. Read-only from the loader's point of view.
- Publisher: receives each finished table, keyed by host IDs.
- LocaleNotifier: tracks the active locale and tells subscribers when
  it changes.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Callable

import structlog

logger = structlog.get_logger()

Publisher = Callable[[str, Mapping[str, str]], None]
LocaleListener = Callable[[str], object]


class HostDictionary(ABC):
    """Lookup into the host application's translations."""

    @abstractmethod
    def try_get(self, locale: str, key: str) -> str | None:
        """Return the host's text for key in locale, or None if it has none."""


class DictHostDictionary(HostDictionary):
    """Host dictionary backed by a plain {locale: {key: text}} mapping."""

    def __init__(self, translations: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self.translations: dict[str, dict[str, str]] = {
            locale: dict(entries) for locale, entries in (translations or {}).items()
        }

    def try_get(self, locale: str, key: str) -> str | None:
        return self.translations.get(locale, {}).get(key)

    def set(self, locale: str, key: str, text: str) -> None:
        self.translations.setdefault(locale, {})[key] = text


class LocaleNotifier:
    """In-process source of "active locale changed" events.

    Listeners are called synchronously, in subscription order, and may
    themselves change the locale again (the loader guards against that).
    """

    def __init__(self, active_locale: str) -> None:
        self._active = active_locale
        self._listeners: list[LocaleListener] = []

    @property
    def active_locale(self) -> str:
        return self._active

    def subscribe(self, listener: LocaleListener) -> None:
        self._listeners.append(listener)

    def set_active_locale(self, locale: str) -> None:
        """Switch the active locale and notify every listener.

        Setting the locale that is already active still notifies, as a
        host re-applying its settings would.
        """
        self._active = locale
        logger.debug("active_locale_changed", locale=locale, listeners=len(self._listeners))
        for listener in list(self._listeners):
            listener(locale)
