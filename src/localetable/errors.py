"""
Exceptions raised by the translation-table loader.

Only two conditions are exceptional:
- HeaderError: the first line of the table is structurally invalid.
  The loader converts it into a failed LoadResult.
- ResourceAccessError: the table could not be read at all.
  It propagates to whoever asked for the load.

Everything else (unknown keys, blank defaults, unresolved markers)
is a Diagnostic, never an exception.
"""

from .diagnostics import Diagnostic


class LocaleTableError(Exception):
    """Base class for all loader errors."""


class HeaderError(LocaleTableError):
    """The header row is malformed and the load must be aborted.

    Attributes:
        diagnostics: One error-class diagnostic per problem found.
    """

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        message = "; ".join(d.message for d in diagnostics) or "invalid header"
        super().__init__(message)


class ResourceAccessError(LocaleTableError):
    """The translation resource could not be opened or decoded."""

    def __init__(self, resource: str, reason: str) -> None:
        self.resource = resource
        self.reason = reason
        super().__init__(f"Cannot read translation resource {resource}: {reason}")
