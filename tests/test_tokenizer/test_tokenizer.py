"""
Tests for the field tokenizer.

Covers:
- Plain and quoted fields
- Escaped quotes and literal commas
- \\n escapes
- Lenient handling of unterminated quotes
- Reading past the end of the line
"""

from localetable.tokenizer import FieldReader


def fields(line: str, count: int) -> list[str]:
    reader = FieldReader(line)
    return [reader.next_field() for _ in range(count)]


class TestPlainFields:
    def test_splits_on_commas(self):
        assert fields("a,b,c", 3) == ["a", "b", "c"]

    def test_whitespace_is_kept(self):
        assert fields(" a , b", 2) == [" a ", " b"]

    def test_empty_fields(self):
        assert fields(",,x", 3) == ["", "", "x"]

    def test_empty_line(self):
        assert fields("", 1) == [""]


class TestQuotedFields:
    def test_comma_and_escaped_quote(self):
        assert fields('"a, ""b"""', 1) == ['a, "b"']

    def test_escaped_quotes_mid_field(self):
        assert fields('key,"a ""b"" c",d', 3) == ["key", 'a "b" c', "d"]

    def test_spreadsheet_style_row(self):
        line = 'plain,"with, comma","say ""hi"" twice",literal\\n'
        assert fields(line, 4) == ["plain", "with, comma", 'say "hi" twice', "literal\n"]

    def test_quoted_then_plain(self):
        assert fields('"x,y",z', 2) == ["x,y", "z"]

    def test_quotes_inside_unquoted_field_toggle_quoting(self):
        assert fields('ab"c,d"e,f', 2) == ["abc,de", "f"]

    def test_unterminated_quote_reads_to_end(self):
        reader = FieldReader('"abc,def')
        assert reader.next_field() == "abc,def"
        assert reader.at_end

    def test_empty_quoted_field(self):
        assert fields('"",x', 2) == ["", "x"]


class TestNewlineEscape:
    def test_literal_backslash_n_becomes_newline(self):
        assert fields("one\\ntwo", 1) == ["one\ntwo"]

    def test_escape_inside_quotes(self):
        assert fields('"a,\\nb"', 1) == ["a,\nb"]


class TestCursor:
    def test_past_end_yields_empty_fields(self):
        reader = FieldReader("a")
        assert reader.next_field() == "a"
        assert reader.next_field() == ""
        assert reader.next_field() == ""

    def test_trailing_delimiter(self):
        reader = FieldReader("a,")
        assert reader.next_field() == "a"
        assert reader.at_end
        assert reader.next_field() == ""
