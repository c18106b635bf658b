"""
Row processing - turns data lines into accumulated per-locale values.

Each data line is:

    key,value for locale 1,value for locale 2,...

Only two locale columns are kept per build: the default locale (the
fallback source) and the active locale. Every column is still read so
the cursor stays aligned with the header.

Rules, in order:
- Blank lines, blank keys and keys starting with '#' are skipped.
- Keys starting with '@@' are temporary; all others must be registered.
- A blank default value becomes the key itself (reported).
- A blank non-default value copies the default value (not reported).
- A temporary key exists (empty) from its first row on.
- $$ and @@ markers are expanded by the ReferenceResolver.
- Repeated keys accumulate their values, newline-joined.
"""

from .diagnostics import DiagnosticKind, DiagnosticLog
from .header import COMMENT_MARKER
from .registry import KeyRegistry
from .resolver import REFERENCE_MARKER, LocaleContext, ReferenceResolver
from .tokenizer import FieldReader


class RowProcessor:
    """Accumulates the default and active locale values of one build.

    Usage:
        processor = RowProcessor(["en-US", "fr-FR"], "en-US", "fr-FR", registry, resolver, log)
        for number, line in enumerate(lines[1:], start=2):
            processor.process(line, number)
        values = processor.finish()
    """

    def __init__(
        self,
        declared_locales: list[str],
        default_locale: str,
        active_locale: str,
        registry: KeyRegistry,
        resolver: ReferenceResolver,
        diagnostics: DiagnosticLog,
    ) -> None:
        self.declared_locales = declared_locales
        self.registry = registry
        self.resolver = resolver
        self.diagnostics = diagnostics

        self.default = LocaleContext(default_locale, is_default=True)
        if active_locale == default_locale:
            self.active = self.default
            self.contexts = [self.default]
        else:
            self.active = LocaleContext(active_locale)
            self.contexts = [self.default, self.active]

        self.occurrences: dict[str, int] = {key: 0 for key in registry}

    def process(self, line: str, number: int | None = None) -> None:
        """Process one data line of the table."""
        if not line.strip():
            return

        reader = FieldReader(line)
        key = reader.next_field()
        if not key or key.startswith(COMMENT_MARKER):
            return

        temporary = key.startswith(REFERENCE_MARKER)
        if not temporary:
            if key not in self.registry:
                self.diagnostics.record(
                    DiagnosticKind.UNKNOWN_KEY,
                    f"Translation key [{key}] is not a registered key",
                    key=key,
                    line=number,
                )
                return
            self.occurrences[key] += 1
        else:
            # A self reference on the first row resolves to ""
            for context in self.contexts:
                context.temporary.setdefault(key, "")

        raw = {locale: reader.next_field() for locale in self.declared_locales}

        # Default first: a blank active value falls back to what it just stored
        for context in self.contexts:
            value = raw.get(context.locale, "")
            if not value:
                value = self._fallback(key, temporary, context, number)
            value = self.resolver.resolve(value, key, context, number)
            context.append(key, value, temporary)

    def _fallback(self, key: str, temporary: bool, context: LocaleContext, number: int | None) -> str:
        if context.is_default:
            self.diagnostics.record(
                DiagnosticKind.MISSING_DEFAULT_VALUE,
                f"Translation for key [{key}] must be defined for default locale [{context.locale}]",
                key=key,
                locale=context.locale,
                line=number,
            )
            return key
        return self.default.values_for(temporary).get(key, "")

    def finish(self) -> dict[str, str]:
        """Fill in registered keys the table never defined.

        Returns:
            The active locale's regular values, ready to publish.
        """
        for key, count in self.occurrences.items():
            if count == 0:
                self.diagnostics.record(
                    DiagnosticKind.KEY_NOT_DEFINED,
                    f"Translation key [{key}] is not defined in the table",
                    key=key,
                    locale=self.active.locale,
                )
                self.active.regular[key] = key
        return dict(self.active.regular)
