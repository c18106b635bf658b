"""
Header row parsing.

The first line of a table declares its locales:

    ,en-US,fr-FR,de-DE

The leading column is empty (it sits above the key column), the
default locale comes first, and no locale appears twice. Any
violation aborts the whole load with a HeaderError.
"""

from collections import Counter

from .diagnostics import Diagnostic, DiagnosticKind
from .errors import HeaderError
from .tokenizer import FieldReader

COMMENT_MARKER = "#"


def parse_header(line: str, default_locale: str) -> list[str]:
    """Extract the ordered list of locales declared by the header row.

    Args:
        line: First line of the resource.
        default_locale: Locale that must be declared first.

    Returns:
        Declared locales in column order.

    Raises:
        HeaderError: If the line is blank or a comment, has a non-empty
            leading column, repeats a locale, or does not start with the
            default locale.
    """
    if not line.strip():
        raise HeaderError([
            Diagnostic(
                DiagnosticKind.HEADER_BLANK,
                "First line is blank, expecting locale codes",
                line=1,
            )
        ])
    if line.startswith(COMMENT_MARKER):
        raise HeaderError([
            Diagnostic(
                DiagnosticKind.HEADER_COMMENT,
                "First line is a comment, expecting locale codes",
                line=1,
            )
        ])

    reader = FieldReader(line)
    leading = reader.next_field()
    if leading:
        raise HeaderError([
            Diagnostic(
                DiagnosticKind.HEADER_LEADING_FIELD,
                f"First column of the header must be empty, found [{leading}]",
                line=1,
            )
        ])

    locales: list[str] = []
    locale = reader.next_field()
    while locale:
        locales.append(locale)
        locale = reader.next_field()

    problems: list[Diagnostic] = []
    counts = Counter(locales)
    for code, count in counts.items():
        if count > 1:
            problems.append(
                Diagnostic(
                    DiagnosticKind.DUPLICATE_LOCALE,
                    f"Locale [{code}] is declared {count} times, expecting 1",
                    locale=code,
                    line=1,
                )
            )

    if not locales or locales[0] != default_locale:
        found = locales[0] if locales else "nothing"
        problems.append(
            Diagnostic(
                DiagnosticKind.DEFAULT_LOCALE_NOT_FIRST,
                f"Default locale [{default_locale}] must be declared first, found [{found}]",
                locale=default_locale,
                line=1,
            )
        )

    if problems:
        raise HeaderError(problems)
    return locales
