"""
Field tokenizer for one line of the translation table.

The table is edited with spreadsheet tools and saved as CSV, so the
quoting rules follow what those tools write:

    plain,"with, comma","say ""hi"" twice",literal\\n becomes a newline

Quoting is lenient: an unterminated quote simply runs to the end of
the line. There is no whitespace trimming.
"""

QUOTE = '"'
DELIMITER = ","
NEWLINE_ESCAPE = "\\n"


class FieldReader:
    """Cursor over a single line that hands out one field at a time.

    Reading past the end of the line keeps returning empty fields, so a
    short row behaves as if the missing columns were blank.

    Usage:
        reader = FieldReader('key,"a ""b"" c",d')
        reader.next_field()  # 'key'
        reader.next_field()  # 'a "b" c'
    """

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.line)

    def next_field(self) -> str:
        """Return the next field and move past its trailing delimiter."""
        line = self.line
        chars: list[str] = []
        in_quotes = False

        while self.pos < len(line):
            char = line[self.pos]
            self.pos += 1

            if char == QUOTE:
                if not in_quotes:
                    in_quotes = True
                elif self.pos < len(line) and line[self.pos] == QUOTE:
                    # Escaped quote
                    chars.append(QUOTE)
                    self.pos += 1
                else:
                    in_quotes = False
            elif char == DELIMITER and not in_quotes:
                break
            else:
                chars.append(char)

        return "".join(chars).replace(NEWLINE_ESCAPE, "\n")
