"""
Token types and source positions for the booleval lexer.

Spans are half-open UTF-8 byte offsets into the source text. Line and
column information is only computed on demand (see ``locate``) when a
diagnostic is rendered.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """All token types recognized by the lexer."""

    IDENT = auto()              # and, or, A, foo
    NUMBER = auto()             # 0, 1, 26, 000123
    LPAREN = auto()             # (
    RPAREN = auto()             # )
    COMMA = auto()              # ,
    WHITESPACE = auto()         # filtered before the parser sees it
    EOF = auto()                # end of input, zero width
    ERROR_UNEXPECTED = auto()   # any other character


@dataclass(frozen=True)
class Span:
    """A half-open range of byte offsets into the source."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span {self.start}..{self.end}")

    def merge(self, other: "Span") -> "Span":
        """Smallest span covering both spans."""
        return Span(min(self.start, other.start), max(self.end, other.end))

    def text(self, source: str) -> str:
        """The slice of ``source`` covered by this span."""
        return source.encode("utf-8")[self.start:self.end].decode("utf-8")

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class SourceLocation:
    """Represents a position in source code."""
    line: int           # 1-indexed line number
    column: int         # 1-indexed column number (characters)
    offset: int         # 0-indexed byte offset from start

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def locate(source: str, offset: int) -> SourceLocation:
    """Translate a byte offset into a line/column location."""
    before = source.encode("utf-8")[:offset].decode("utf-8", errors="replace")
    line = before.count("\n") + 1
    column = len(before) - (before.rfind("\n") + 1) + 1
    return SourceLocation(line, column, offset)


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: Any              # lexeme for IDENT/NUMBER, the char for ERROR_UNEXPECTED
    lexeme: str             # The original source text
    span: Span              # Location in source

    def describe(self) -> str:
        """Token kind as shown in parser messages."""
        if self.type == TokenType.ERROR_UNEXPECTED:
            return f"{self.type.name}({self.value!r})"
        return self.type.name

    def __str__(self) -> str:
        if self.type in (TokenType.IDENT, TokenType.NUMBER):
            return f"{self.type.name}({self.value!r})"
        return self.describe()
