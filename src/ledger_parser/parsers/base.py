"""Parse cursor and error types shared by all grammar rules.

Every rule takes a ``Cursor`` and returns ``(value, cursor)`` where the
returned cursor sits just after the consumed text. Failures raise
``ParseError``; a rule never mutates the cursor it was given.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple


_LINE_END = re.compile(r'\r?\n|\Z')


@dataclass(frozen=True)
class Cursor:
    """Immutable position within a source text"""
    text: str = field(repr=False)
    offset: int = 0
    source_name: str = ""

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    def peek(self) -> str:
        """Return the current character, or '' at end of input"""
        return self.text[self.offset:self.offset + 1]

    def advance(self, count: int) -> 'Cursor':
        return Cursor(self.text, self.offset + count, self.source_name)

    def seek(self, offset: int) -> 'Cursor':
        return Cursor(self.text, offset, self.source_name)

    def match(self, pattern: re.Pattern) -> Optional[Tuple[re.Match, "Cursor"]]:
        """Match a compiled pattern anchored at the cursor"""
        m = pattern.match(self.text, self.offset)
        if m is None:
            return None
        return m, self.seek(m.end())

    def line_end(self) -> int:
        """Offset of the line terminator following the cursor"""
        return _LINE_END.search(self.text, self.offset).start()

    @property
    def position(self) -> Tuple[int, int]:
        """1-based (line, column) of the cursor"""
        line = self.text.count('\n', 0, self.offset) + 1
        column = self.offset - (self.text.rfind('\n', 0, self.offset) + 1) + 1
        return line, column


class ParseError(Exception):
    """Raised when a grammar rule cannot match at a position.

    Line, column and message are computed on access.

    Attributes:
        expected: Description of the construct the rule was looking for
        cursor: Position of the failure
        source_name: Diagnostic label of the parsed source
        offset: Character offset of the failure
        line: 1-based line number of the failure
        column: 1-based column number of the failure
        found: Text at the failure position, up to the end of the line
    """

    def __init__(self, expected: str, cursor: Cursor, found: Optional[str] = None):
        super().__init__(expected)
        self.expected = expected
        self.cursor = cursor
        self._found = found

    @property
    def source_name(self) -> str:
        return self.cursor.source_name

    @property
    def offset(self) -> int:
        return self.cursor.offset

    @property
    def line(self) -> int:
        return self.cursor.position[0]

    @property
    def column(self) -> int:
        return self.cursor.position[1]

    @property
    def found(self) -> str:
        if self._found is None:
            return self.cursor.text[self.cursor.offset:self.cursor.line_end()][:20]
        return self._found

    def __str__(self) -> str:
        source = self.source_name or "<input>"
        line, column = self.cursor.position
        message = f"{source}:{line}:{column}: expected {self.expected}"
        if self.found:
            message += f", found {self.found!r}"
        elif self.cursor.at_end:
            message += ", found end of input"
        else:
            message += ", found end of line"
        return message


class LexicalError(ParseError):
    """Malformed token: bad number or date, unterminated literal"""


class StructuralError(ParseError):
    """Missing mandatory component or unexpected trailing input"""
