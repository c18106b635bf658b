"""
Diagnostics - structured records of everything odd found during a load.

A load never stops for a row-level defect. Instead it records a
Diagnostic, logs it, and carries on with a best-effort value.
The caller gets the full list back in the LoadResult.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from .cache import LocaleTable

logger = structlog.get_logger()


class Severity(Enum):
    WARNING = "warning"
    ERROR = "error"


class DiagnosticKind(Enum):
    """Class of defect a diagnostic describes."""

    # Structural: the load is aborted
    HEADER_BLANK = "header_blank"
    HEADER_COMMENT = "header_comment"
    HEADER_LEADING_FIELD = "header_leading_field"
    DUPLICATE_LOCALE = "duplicate_locale"
    DEFAULT_LOCALE_NOT_FIRST = "default_locale_not_first"

    # Row-level: the load continues
    UNKNOWN_KEY = "unknown_key"
    MISSING_DEFAULT_VALUE = "missing_default_value"
    UNRESOLVED_REFERENCE = "unresolved_reference"
    UNRESOLVED_PASS_THROUGH = "unresolved_pass_through"
    LOCALE_NOT_IN_TABLE = "locale_not_in_table"
    KEY_NOT_DEFINED = "key_not_defined"


_STRUCTURAL = {
    DiagnosticKind.HEADER_BLANK,
    DiagnosticKind.HEADER_COMMENT,
    DiagnosticKind.HEADER_LEADING_FIELD,
    DiagnosticKind.DUPLICATE_LOCALE,
    DiagnosticKind.DEFAULT_LOCALE_NOT_FIRST,
}


@dataclass(frozen=True)
class Diagnostic:
    """One defect found while loading a table.

    Attributes:
        kind: Defect class.
        message: Human readable description, names the key and/or locale.
        key: Offending translation key, if any.
        locale: Locale being processed, if any.
        line: 1-based line number in the resource, if any.
    """

    kind: DiagnosticKind
    message: str
    key: str | None = None
    locale: str | None = None
    line: int | None = None

    @property
    def severity(self) -> Severity:
        return Severity.ERROR if self.kind in _STRUCTURAL else Severity.WARNING

    def __str__(self) -> str:
        where = f"line {self.line}: " if self.line is not None else ""
        return f"{where}{self.message}"


class DiagnosticLog:
    """Collects diagnostics for one load and mirrors them to the log."""

    def __init__(self) -> None:
        self.items: list[Diagnostic] = []

    def record(
        self,
        kind: DiagnosticKind,
        message: str,
        *,
        key: str | None = None,
        locale: str | None = None,
        line: int | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, message=message, key=key, locale=locale, line=line)
        self.add(diagnostic)
        return diagnostic

    def add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        log = logger.error if diagnostic.severity is Severity.ERROR else logger.warning
        log(
            f"translation_{diagnostic.kind.value}",
            key=diagnostic.key,
            locale=diagnostic.locale,
            line=diagnostic.line,
            detail=diagnostic.message,
        )

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.items if d.kind is kind]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass
class LoadResult:
    """Outcome of one load request.

    Attributes:
        locale: Locale that was requested.
        success: False only for structural failures.
        cached: True if the table was already built and nothing was parsed.
        table: The published table, None when the load failed.
        diagnostics: Everything recorded during the load (empty on a cache hit).
        error: Short description of the structural failure, if any.
    """

    locale: str
    success: bool
    cached: bool = False
    table: "LocaleTable | None" = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: str | None = None

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    def summary(self) -> str:
        if not self.success:
            return f"{self.locale}: load failed ({self.error})"
        if self.cached:
            return f"{self.locale}: served from cache"
        size = len(self.table) if self.table is not None else 0
        return f"{self.locale}: {size} keys, {len(self.warnings)} warnings"
