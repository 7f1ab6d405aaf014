"""Decoding of literal token text into Python values."""

from __future__ import annotations

from plugdef.tokens import Token, TokenType


def literal_value(token: Token) -> str | int | bool:
    """Return the value a literal token denotes.

    STRING_LITERAL yields the text between the quotes (there are no escapes
    to resolve), NUMBER_LITERAL an int, BOOLEAN_LITERAL a bool.
    """
    if token.kind == TokenType.STRING_LITERAL:
        return token.text[1:-1]
    if token.kind == TokenType.NUMBER_LITERAL:
        return int(token.text)
    if token.kind == TokenType.BOOLEAN_LITERAL:
        return token.text == "true"
    raise ValueError(f"{token.kind.name} token {token.text!r} is not a literal")
