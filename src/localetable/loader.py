"""
Translation loader - builds, caches and publishes locale tables.

The loader reacts to "active locale changed" events. For a locale it
has not built yet it reads the whole resource, parses the header,
runs every data line through the RowProcessor and publishes the
result. For a locale already built it does nothing.

Invariants:
- A structural header failure publishes nothing and leaves earlier
  tables servable. It is reported as a failed LoadResult.
- A resource that cannot be read raises ResourceAccessError.
- A table is stored in the cache before it is published, so a host
  that fires another "changed" event while being handed the table
  gets a cache hit instead of a second parse.
"""

import re

import structlog

from .cache import LocaleTable, LocaleTableCache
from .config.schema import LoaderConfig
from .diagnostics import DiagnosticKind, DiagnosticLog, LoadResult
from .errors import HeaderError, ResourceAccessError
from .header import parse_header
from .host import DictHostDictionary, HostDictionary, LocaleNotifier, Publisher
from .registry import KeyRegistry
from .resolver import ReferenceResolver
from .resources import FileResource, ResourceProvider
from .rows import RowProcessor

logger = structlog.get_logger()

LINE_BREAK = re.compile(r"\r?\n")


def read_resource(resource: ResourceProvider) -> str:
    """Read the whole resource as text.

    Raises:
        ResourceAccessError: If it cannot be opened, read or decoded.
    """
    try:
        with resource.open() as stream:
            data = stream.read()
    except (OSError, ImportError) as e:
        raise ResourceAccessError(resource.name, str(e)) from e

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ResourceAccessError(resource.name, f"not valid UTF-8 ({e})") from e


class TranslationLoader:
    """Orchestrates table builds in response to locale changes.

    Usage:
        loader = TranslationLoader(FileResource("translation.csv"), KeyRegistry(["Title"]))
        loader.attach(notifier)      # initial load + follow locale changes
        loader.get("Title")
    """

    def __init__(
        self,
        resource: ResourceProvider,
        registry: KeyRegistry,
        host: HostDictionary | None = None,
        *,
        default_locale: str = "en-US",
        publisher: Publisher | None = None,
        cache: LocaleTableCache | None = None,
    ) -> None:
        self.resource = resource
        self.registry = registry
        self.host = host if host is not None else DictHostDictionary()
        self.default_locale = default_locale
        self.publisher = publisher
        self.cache = cache or LocaleTableCache(default_locale)

    @classmethod
    def from_config(
        cls,
        config: LoaderConfig,
        resource: ResourceProvider | None = None,
        registry: KeyRegistry | None = None,
        **kwargs,
    ) -> "TranslationLoader":
        """Build a loader from configuration.

        Explicit collaborators win over the paths in config.

        Raises:
            ValueError: If neither a resource nor config.table is available.
        """
        if resource is None:
            if config.table is None:
                raise ValueError("No translation table configured")
            resource = FileResource(config.table)
        if registry is None:
            registry = KeyRegistry.from_yaml(config.keys) if config.keys else KeyRegistry([])
        return cls(resource, registry, default_locale=config.default_locale, **kwargs)

    def attach(self, notifier: LocaleNotifier) -> LoadResult:
        """Follow notifier's locale changes and load its current locale."""
        notifier.subscribe(self.on_locale_changed)
        return self.load(notifier.active_locale)

    def on_locale_changed(self, locale: str) -> LoadResult:
        return self.load(locale)

    def load(self, locale: str) -> LoadResult:
        """Make locale the active locale, building its table if needed.

        Raises:
            ResourceAccessError: If the resource cannot be read.
        """
        self.cache.activate(locale)
        if self.cache.is_built(locale):
            logger.debug("table_cache_hit", locale=locale)
            return LoadResult(locale=locale, success=True, cached=True, table=self.cache.table(locale))

        result = self._build(locale)
        if result.success:
            self._publish(result.table)
        return result

    def _build(self, locale: str) -> LoadResult:
        """Read and parse the resource into a table for locale.

        Leaves the cache untouched, so a failure here never disturbs
        tables already built.
        """
        logger.info("table_load_started", locale=locale, resource=self.resource.name)
        text = read_resource(self.resource)
        diagnostics = DiagnosticLog()
        lines = LINE_BREAK.split(text)

        try:
            declared = parse_header(lines[0], self.default_locale)
        except HeaderError as e:
            for diagnostic in e.diagnostics:
                diagnostics.add(diagnostic)
            logger.error("table_load_aborted", locale=locale, reason=str(e))
            return LoadResult(
                locale=locale,
                success=False,
                diagnostics=diagnostics.items,
                error=str(e),
            )

        if locale not in declared:
            diagnostics.record(
                DiagnosticKind.LOCALE_NOT_IN_TABLE,
                f"Locale [{locale}] is not declared in the table, "
                f"using default locale [{self.default_locale}] values",
                locale=locale,
                line=1,
            )

        processor = RowProcessor(
            declared_locales=declared,
            default_locale=self.default_locale,
            active_locale=locale,
            registry=self.registry,
            resolver=ReferenceResolver(self.host, diagnostics, self.registry),
            diagnostics=diagnostics,
        )
        for number, line in enumerate(lines[1:], start=2):
            processor.process(line, number)

        table = LocaleTable.build(locale, processor.finish())
        logger.info(
            "table_load_complete",
            locale=locale,
            keys=len(table),
            diagnostics=len(diagnostics),
        )
        return LoadResult(locale=locale, success=True, table=table, diagnostics=diagnostics.items)

    def _publish(self, table: LocaleTable) -> None:
        # Stored before publishing: a re-entrant locale change is a cache hit
        self.cache.store(table)
        if self.publisher is not None:
            self.publisher(table.locale, table.host_entries(self.registry))

    def reload(self) -> LoadResult | None:
        """Rebuild the active locale and forget every other built table.

        Used when the resource itself has changed. The new table is built
        before anything is dropped: if the resource cannot be read or its
        header is invalid, the cache keeps serving the old tables.

        Raises:
            ResourceAccessError: If the resource cannot be read.
        """
        active = self.cache.active_locale
        if active is None:
            return None

        result = self._build(active)
        if not result.success:
            logger.warning("table_reload_failed", locale=active, reason=result.error)
            return result

        dropped = self.cache.clear()
        logger.info("table_cache_cleared", tables=dropped)
        self._publish(result.table)
        return result

    def get(self, key: str, locale: str | None = None) -> str:
        """Translated text for key. Never raises."""
        return self.cache.get(key, locale)
