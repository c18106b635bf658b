"""
Reference resolution inside translated values.

Two kinds of indirection are expanded:

    $$Some.Host.Key    whole value is replaced by the host's own translation
    ... @@OtherKey ... inline reference to a value already read from the table

Inline references are resolved only against values accumulated so far
in the same locale context: regular keys in key registry order, then
temporary keys in the order they first appeared. A reference to a key
defined further down the file is left verbatim and reported. A temporary
key referencing itself on its first row sees an empty value.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .diagnostics import DiagnosticKind, DiagnosticLog
from .host import HostDictionary

if TYPE_CHECKING:
    from .registry import KeyRegistry

REFERENCE_MARKER = "@@"
PASS_THROUGH_MARKER = "$$"


@dataclass
class LocaleContext:
    """Values accumulated so far for one locale during a build.

    Regular and temporary keys are kept apart so temporaries never
    reach the published table.
    """

    locale: str
    is_default: bool = False
    regular: dict[str, str] = field(default_factory=dict)
    temporary: dict[str, str] = field(default_factory=dict)

    def values_for(self, temporary: bool) -> dict[str, str]:
        return self.temporary if temporary else self.regular

    def append(self, key: str, value: str, temporary: bool) -> None:
        """Store a value, joining with a newline if the key already has one."""
        values = self.values_for(temporary)
        existing = values.get(key)
        values[key] = f"{existing}\n{value}" if existing else value


class ReferenceResolver:
    """Expands $$ and @@ markers for one build."""

    def __init__(
        self,
        host: HostDictionary,
        diagnostics: DiagnosticLog,
        registry: "KeyRegistry | None" = None,
    ) -> None:
        self.host = host
        self.diagnostics = diagnostics
        self.registry = registry

    def resolve(self, value: str, key: str, context: LocaleContext, line: int | None = None) -> str:
        """Return value with its markers expanded for the given context.

        Args:
            value: Raw (already fallback-resolved) field value.
            key: Key of the row being processed, for diagnostics.
            context: Locale context the value belongs to.
            line: Line number, for diagnostics.

        Returns:
            The expanded value. Markers that cannot be resolved stay in place.
        """
        if value.startswith(PASS_THROUGH_MARKER):
            return self._pass_through(value, key, context, line)
        if REFERENCE_MARKER in value:
            return self._substitute(value, key, context, line)
        return value

    def _pass_through(self, value: str, key: str, context: LocaleContext, line: int | None) -> str:
        host_key = value[len(PASS_THROUGH_MARKER):]
        text = self.host.try_get(context.locale, host_key)
        if text is None:
            self.diagnostics.record(
                DiagnosticKind.UNRESOLVED_PASS_THROUGH,
                f"Host translation [{host_key}] does not exist for locale "
                f"[{context.locale}] (key [{key}])",
                key=key,
                locale=context.locale,
                line=line,
            )
            return value
        return text

    def _substitute(self, value: str, key: str, context: LocaleContext, line: int | None) -> str:
        for ref_key in self._reference_order(context):
            value = value.replace(REFERENCE_MARKER + ref_key, context.regular[ref_key])
        # Temporary keys carry the marker in their own name
        for ref_key, ref_value in context.temporary.items():
            value = value.replace(ref_key, ref_value)

        if REFERENCE_MARKER in value:
            self.diagnostics.record(
                DiagnosticKind.UNRESOLVED_REFERENCE,
                f"Translation for key [{key}] for locale [{context.locale}] "
                f"has an unresolved {REFERENCE_MARKER} reference",
                key=key,
                locale=context.locale,
                line=line,
            )
        return value

    def _reference_order(self, context: LocaleContext) -> list[str]:
        """Regular keys to substitute, in key registry order.

        Without a registry, keys are taken in the order they were accumulated.
        """
        if self.registry is None:
            return list(context.regular)
        return [key for key in self.registry if key in context.regular]
