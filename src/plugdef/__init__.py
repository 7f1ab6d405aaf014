"""Plugdef schema/plugin definition language lexer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plugdef.lexer import Observer
    from plugdef.tokens import Token

__version__ = "0.1.0"


def tokenize(
    source: str,
    *,
    comment_marker: str = "//",
    observer: Observer | None = None,
) -> list[Token]:
    """Tokenize plugdef source into a span-contiguous token list ending in EOF."""
    from plugdef.lexer import tokenize as _tokenize

    return _tokenize(source, comment_marker=comment_marker, observer=observer)
