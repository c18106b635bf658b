"""
localetable - locale-resolving translation table loader.

Reads a CSV-like table of translations (one column per locale), resolves
fallbacks and @@ / $$ references, and serves per-locale lookups that
never fail.

Public API:
    TranslationLoader     - builds, caches and publishes locale tables
    KeyRegistry           - declared set of valid translation keys
    FileResource, PackageResource, TextResource - where the table comes from
    DictHostDictionary    - host translations for $$ pass-through values
    LocaleNotifier        - in-process "active locale changed" events

Usage:
    from localetable import FileResource, KeyRegistry, LocaleNotifier, TranslationLoader

    notifier = LocaleNotifier("fr-FR")
    loader = TranslationLoader(FileResource("translation.csv"), KeyRegistry(["Title"]))
    loader.attach(notifier)
    print(loader.get("Title"))
"""

from .cache import LocaleTable, LocaleTableCache
from .diagnostics import Diagnostic, DiagnosticKind, LoadResult, Severity
from .errors import HeaderError, LocaleTableError, ResourceAccessError
from .host import DictHostDictionary, HostDictionary, LocaleNotifier, Publisher
from .loader import TranslationLoader
from .registry import KeyRegistry
from .resources import FileResource, PackageResource, ResourceProvider, TextResource

__version__ = "0.1.0"

__all__ = [
    "TranslationLoader",
    "LocaleTable",
    "LocaleTableCache",
    "KeyRegistry",
    "Diagnostic",
    "DiagnosticKind",
    "LoadResult",
    "Severity",
    "LocaleTableError",
    "HeaderError",
    "ResourceAccessError",
    "HostDictionary",
    "DictHostDictionary",
    "LocaleNotifier",
    "Publisher",
    "ResourceProvider",
    "FileResource",
    "PackageResource",
    "TextResource",
]
