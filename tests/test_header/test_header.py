"""Tests for header row parsing."""

import pytest

from localetable.diagnostics import DiagnosticKind, Severity
from localetable.errors import HeaderError
from localetable.header import parse_header


def kinds(error: HeaderError) -> list[DiagnosticKind]:
    return [d.kind for d in error.diagnostics]


class TestValidHeaders:
    def test_locales_in_order(self):
        assert parse_header(",en-US,fr-FR,de-DE", "en-US") == ["en-US", "fr-FR", "de-DE"]

    def test_quoted_locales(self):
        assert parse_header(',"en-US","fr-FR"', "en-US") == ["en-US", "fr-FR"]

    def test_stops_at_first_empty_field(self):
        assert parse_header(",en-US,,fr-FR", "en-US") == ["en-US"]

    def test_trailing_comma(self):
        assert parse_header(",en-US,fr-FR,", "en-US") == ["en-US", "fr-FR"]

    def test_other_default_locale(self):
        assert parse_header(",de-DE,en-US", "de-DE") == ["de-DE", "en-US"]


class TestStructuralFailures:
    def test_blank_line(self):
        with pytest.raises(HeaderError) as exc:
            parse_header("   ", "en-US")
        assert kinds(exc.value) == [DiagnosticKind.HEADER_BLANK]

    def test_comment_line(self):
        with pytest.raises(HeaderError) as exc:
            parse_header("#,en-US", "en-US")
        assert kinds(exc.value) == [DiagnosticKind.HEADER_COMMENT]

    def test_leading_column_not_empty(self):
        with pytest.raises(HeaderError) as exc:
            parse_header("key,en-US", "en-US")
        assert kinds(exc.value) == [DiagnosticKind.HEADER_LEADING_FIELD]
        assert "key" in str(exc.value)

    def test_duplicate_locale(self):
        with pytest.raises(HeaderError) as exc:
            parse_header(",en-US,fr-FR,fr-FR", "en-US")
        assert kinds(exc.value) == [DiagnosticKind.DUPLICATE_LOCALE]
        assert exc.value.diagnostics[0].locale == "fr-FR"
        assert "2 times" in exc.value.diagnostics[0].message

    def test_default_not_first(self):
        with pytest.raises(HeaderError) as exc:
            parse_header(",fr-FR,en-US", "en-US")
        assert kinds(exc.value) == [DiagnosticKind.DEFAULT_LOCALE_NOT_FIRST]
        assert "fr-FR" in str(exc.value)

    def test_no_locales(self):
        with pytest.raises(HeaderError) as exc:
            parse_header(",", "en-US")
        assert kinds(exc.value) == [DiagnosticKind.DEFAULT_LOCALE_NOT_FIRST]

    def test_all_problems_reported(self):
        with pytest.raises(HeaderError) as exc:
            parse_header(",fr-FR,fr-FR", "en-US")
        assert set(kinds(exc.value)) == {
            DiagnosticKind.DUPLICATE_LOCALE,
            DiagnosticKind.DEFAULT_LOCALE_NOT_FIRST,
        }

    def test_failures_are_errors(self):
        with pytest.raises(HeaderError) as exc:
            parse_header(",fr-FR", "en-US")
        assert all(d.severity is Severity.ERROR for d in exc.value.diagnostics)
        assert all(d.line == 1 for d in exc.value.diagnostics)
