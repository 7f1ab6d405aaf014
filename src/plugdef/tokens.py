"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Reserved words
    PLUGIN = auto()  # plugin
    USE = auto()  # use
    PROP = auto()  # prop
    ENUM = auto()  # enum
    TYPE = auto()  # type
    MODEL = auto()  # model

    # Primitive type names
    STRING_TYPE = auto()  # String
    NUMBER_TYPE = auto()  # Number
    BOOLEAN_TYPE = auto()  # Boolean
    TEXT_TYPE = auto()  # Text
    DATE_TYPE = auto()  # Date

    # Literals
    STRING_LITERAL = auto()  # "..." (one or more non-quote chars)
    NUMBER_LITERAL = auto()  # -?[0-9]+
    BOOLEAN_LITERAL = auto()  # true / false

    # Structural (single-character)
    OPEN_BRACE = auto()  # {
    CLOSE_BRACE = auto()  # }
    OPEN_PAREN = auto()  # (
    CLOSE_PAREN = auto()  # )
    OPEN_SQUARE = auto()  # [
    CLOSE_SQUARE = auto()  # ]
    AT_SYMBOL = auto()  # @
    OPTIONAL = auto()  # ?

    IDENTIFIER = auto()  # [A-Za-z_][A-Za-z0-9_]*

    # Layout
    WHITESPACE = auto()  # spaces/tabs
    LINE_BREAK = auto()  # \n or \r
    COMMENT = auto()  # marker through end of line

    ERROR = auto()  # unscannable character
    EOF = auto()

    @property
    def is_layout(self) -> bool:
        return self in _LAYOUT

    @property
    def is_keyword(self) -> bool:
        return self in _KEYWORD_TYPES

    @property
    def is_literal(self) -> bool:
        return self in _LITERALS


_LAYOUT = frozenset({TokenType.WHITESPACE, TokenType.LINE_BREAK, TokenType.COMMENT})
_LITERALS = frozenset(
    {TokenType.STRING_LITERAL, TokenType.NUMBER_LITERAL, TokenType.BOOLEAN_LITERAL}
)

# Whole-word spellings matched before the generic identifier rule
KEYWORDS: dict[str, TokenType] = {
    "plugin": TokenType.PLUGIN,
    "use": TokenType.USE,
    "prop": TokenType.PROP,
    "enum": TokenType.ENUM,
    "type": TokenType.TYPE,
    "model": TokenType.MODEL,
    "String": TokenType.STRING_TYPE,
    "Number": TokenType.NUMBER_TYPE,
    "Boolean": TokenType.BOOLEAN_TYPE,
    "Text": TokenType.TEXT_TYPE,
    "Date": TokenType.DATE_TYPE,
}

BOOLEANS: dict[str, TokenType] = {
    "true": TokenType.BOOLEAN_LITERAL,
    "false": TokenType.BOOLEAN_LITERAL,
}

_KEYWORD_TYPES = frozenset(KEYWORDS.values())

SYMBOLS: dict[str, TokenType] = {
    "{": TokenType.OPEN_BRACE,
    "}": TokenType.CLOSE_BRACE,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    "[": TokenType.OPEN_SQUARE,
    "]": TokenType.CLOSE_SQUARE,
    "@": TokenType.AT_SYMBOL,
    "?": TokenType.OPTIONAL,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A classified slice of source text, covering ``source[start:end]``."""

    kind: TokenType
    text: str
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


class LineIndex:
    """Map offsets in one source buffer to line/column positions.

    ``\\n``, ``\\r\\n`` and a lone ``\\r`` each end a line.
    """

    def __init__(self, source: str) -> None:
        self._length = len(source)
        starts = [0]
        i = 0
        n = len(source)
        while i < n:
            ch = source[i]
            if ch == "\r" and i + 1 < n and source[i + 1] == "\n":
                i += 2
                starts.append(i)
                continue
            i += 1
            if ch in "\r\n":
                starts.append(i)
        self._starts = starts

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def position(self, offset: int) -> Position:
        if not 0 <= offset <= self._length:
            raise ValueError(f"offset {offset} outside source of length {self._length}")
        line_idx = bisect_right(self._starts, offset) - 1
        return Position(line_idx + 1, offset - self._starts[line_idx] + 1, offset)


_ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")


def is_ident_start(ch: str) -> bool:
    """Return True if ch can begin an identifier."""
    return ch in _ASCII_LETTERS or ch == "_"


def is_ident_char(ch: str) -> bool:
    """Return True if ch can continue an identifier."""
    return ch in _ASCII_LETTERS or ch in _DIGITS or ch == "_"


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch in _DIGITS
