"""Plugdef lexer — converts source text into a flat, span-contiguous token stream."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from plugdef.tokens import (
    BOOLEANS,
    KEYWORDS,
    SYMBOLS,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_ident_start,
)

DEFAULT_COMMENT_MARKER = "//"

# A matcher inspects source at an index and returns the match length (0 = no match).
Matcher = Callable[[str, int], int]
Observer = Callable[[Token], None]

_WORDS: dict[str, TokenType] = {**KEYWORDS, **BOOLEANS}


# ----------------------------------------------------------------------
# Matchers, one per rule
# ----------------------------------------------------------------------


def _match_line_break(source: str, index: int) -> int:
    # "\r\n" is never taken as a unit: "\r" wins first, then "\n" on the next pass.
    return 1 if source[index] in "\n\r" else 0


def _match_whitespace(source: str, index: int) -> int:
    end = index
    while end < len(source) and source[end] in " \t":
        end += 1
    return end - index


def _match_string(source: str, index: int) -> int:
    if source[index] != '"':
        return 0
    close = source.find('"', index + 1)
    if close <= index + 1:
        return 0
    return close + 1 - index


def _ident_run(source: str, index: int) -> int:
    end = index
    while end < len(source) and is_ident_char(source[end]):
        end += 1
    return end - index


def _match_word(source: str, index: int) -> int:
    length = _ident_run(source, index)
    if length and source[index : index + length] in _WORDS:
        return length
    return 0


def _match_identifier(source: str, index: int) -> int:
    if not is_ident_start(source[index]):
        return 0
    return _ident_run(source, index)


def _match_number(source: str, index: int) -> int:
    end = index
    if source[end] == "-":
        end += 1
    digits_start = end
    while end < len(source) and is_digit(source[end]):
        end += 1
    if end == digits_start:
        return 0
    return end - index


def _match_symbol(source: str, index: int) -> int:
    return 1 if source[index] in SYMBOLS else 0


def _comment_matcher(marker: str) -> Matcher:
    def _match_comment(source: str, index: int) -> int:
        if not source.startswith(marker, index):
            return 0
        end = index + len(marker)
        while end < len(source) and source[end] not in "\n\r":
            end += 1
        return end - index

    return _match_comment


class Lexer:
    """Tokenize plugdef source text into a stream of Token objects.

    Rules are tried in a fixed order at each position and the first non-empty
    match wins. A character no rule accepts becomes a one-character ERROR
    token, so scanning never fails and every character lands in a token.
    """

    def __init__(
        self,
        source: str,
        comment_marker: str = DEFAULT_COMMENT_MARKER,
        observer: Observer | None = None,
    ) -> None:
        if not comment_marker:
            raise ValueError("comment marker must not be empty")
        if "\n" in comment_marker or "\r" in comment_marker:
            raise ValueError(f"comment marker must not contain a line break: {comment_marker!r}")
        self._source = source
        self._observer = observer
        self._pos = 0
        self._tokens: list[Token] = []
        # (matcher, kind or spelling -> kind table), in priority order
        self._rules: tuple[tuple[Matcher, TokenType | dict[str, TokenType]], ...] = (
            (_match_line_break, TokenType.LINE_BREAK),
            (_match_whitespace, TokenType.WHITESPACE),
            (_match_string, TokenType.STRING_LITERAL),
            (_match_word, _WORDS),
            (_match_identifier, TokenType.IDENTIFIER),
            (_match_number, TokenType.NUMBER_LITERAL),
            (_match_symbol, SYMBOLS),
            (_comment_matcher(comment_marker), TokenType.COMMENT),
        )

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list, ending in EOF."""
        self._pos = 0
        self._tokens = []
        while self._pos < len(self._source):
            self._scan()
        self._emit(TokenType.EOF, self._pos)
        return self._tokens

    def _scan(self) -> None:
        for matcher, kind in self._rules:
            length = matcher(self._source, self._pos)
            if length:
                end = self._pos + length
                if not isinstance(kind, TokenType):
                    kind = kind[self._source[self._pos : end]]
                self._emit(kind, end)
                return
        self._emit(TokenType.ERROR, self._pos + 1)

    def _emit(self, tt: TokenType, end: int) -> Token:
        tok = Token(tt, self._source[self._pos : end], self._pos, end)
        self._tokens.append(tok)
        self._pos = end
        if self._observer is not None:
            self._observer(tok)
        return tok


def tokenize(
    source: str,
    *,
    comment_marker: str = DEFAULT_COMMENT_MARKER,
    observer: Observer | None = None,
) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, comment_marker, observer).tokenize()


def significant(tokens: Iterable[Token]) -> list[Token]:
    """Return the tokens without whitespace, line breaks, and comments."""
    return [t for t in tokens if not t.kind.is_layout]
