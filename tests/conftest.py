"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from plugdef.lexer import tokenize
from plugdef.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str, comment_marker: str = "//") -> list[Token]:
        tokens = tokenize(source, comment_marker=comment_marker)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.kind != TokenType.EOF]

    return _lex


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_contiguous(tokens: list[Token], source: str) -> None:
    """Assert the stream covers source exactly, gap-free, ending in one EOF."""
    assert tokens, "Expected at least the EOF token"
    assert tokens[-1].kind == TokenType.EOF
    assert tokens[-1].start == tokens[-1].end == len(source)
    assert sum(1 for t in tokens if t.kind == TokenType.EOF) == 1
    assert tokens[0].start == 0
    for prev, nxt in zip(tokens, tokens[1:]):
        assert prev.end == nxt.start, f"Gap between {prev} and {nxt}"
    for t in tokens:
        assert source[t.start : t.end] == t.text
    assert "".join(t.text for t in tokens) == source


def find_tokens(tokens: list[Token], tt: TokenType) -> list[Token]:
    """Return all tokens of the given kind."""
    return [t for t in tokens if t.kind == tt]
