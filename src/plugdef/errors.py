"""Lex diagnostics with formatted source context."""

from __future__ import annotations

from collections.abc import Iterable

from plugdef.tokens import LineIndex, Position, Token, TokenType


class LexError(Exception):
    """An unscannable character, with position and source context.

    The lexer never raises this itself; it reports ERROR tokens and callers
    that want to reject input build and raise LexError from them.
    """

    def __init__(self, message: str, position: Position, source: str, length: int = 1) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.length = length
        super().__init__(self.format())

    @classmethod
    def from_token(cls, token: Token, source: str, index: LineIndex | None = None) -> LexError:
        if index is None:
            index = LineIndex(source)
        message = f"unexpected character {token.text!r}" if token.text else "unexpected input"
        return cls(message, index.position(token.start), source, len(token))

    def format(self, filename: str = "input.pd") -> str:
        col = self.position.column

        # Build the source line (up to, not including, its line break)
        line_start = self.position.offset - (col - 1)
        line_end = line_start
        while line_end < len(self.source) and self.source[line_end] not in "\n\r":
            line_end += 1
        source_line = self.source[line_start:line_end]

        # Underline the token, at least 1 char, but stay within the line
        underline_len = max(1, min(self.length, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


def collect_errors(tokens: Iterable[Token], source: str) -> list[LexError]:
    """Return one LexError per ERROR token, in stream order."""
    index = LineIndex(source)
    return [LexError.from_token(t, source, index) for t in tokens if t.kind == TokenType.ERROR]
