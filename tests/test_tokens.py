"""Test structural tokens: { } ( ) [ ] @ ?"""

import pytest

from plugdef.tokens import Token, TokenType

from .conftest import assert_types


class TestBraces:
    def test_open_brace(self, lex):
        tokens = lex("{")
        assert_types(tokens, [TokenType.OPEN_BRACE])
        assert tokens[0].text == "{"

    def test_close_brace(self, lex):
        tokens = lex("}")
        assert_types(tokens, [TokenType.CLOSE_BRACE])

    def test_brace_pair(self, lex):
        tokens = lex("{}")
        assert_types(tokens, [TokenType.OPEN_BRACE, TokenType.CLOSE_BRACE])


class TestParens:
    def test_paren_pair(self, lex):
        tokens = lex("()")
        assert_types(tokens, [TokenType.OPEN_PAREN, TokenType.CLOSE_PAREN])


class TestSquare:
    def test_square_pair(self, lex):
        tokens = lex("[]")
        assert_types(tokens, [TokenType.OPEN_SQUARE, TokenType.CLOSE_SQUARE])

    def test_nesting_is_not_checked(self, lex):
        tokens = lex("]][")
        assert_types(
            tokens, [TokenType.CLOSE_SQUARE, TokenType.CLOSE_SQUARE, TokenType.OPEN_SQUARE]
        )


class TestAnnotationsAndOptional:
    def test_at_symbol(self, lex):
        tokens = lex("@")
        assert_types(tokens, [TokenType.AT_SYMBOL])

    def test_annotation(self, lex):
        tokens = lex("@default(4)")
        assert_types(
            tokens,
            [
                TokenType.AT_SYMBOL,
                TokenType.IDENTIFIER,
                TokenType.OPEN_PAREN,
                TokenType.NUMBER_LITERAL,
                TokenType.CLOSE_PAREN,
            ],
        )

    def test_optional_marker(self, lex):
        tokens = lex("String?")
        assert_types(tokens, [TokenType.STRING_TYPE, TokenType.OPTIONAL])
        assert tokens[1].text == "?"

    def test_array_of_type(self, lex):
        tokens = lex("[Text]?")
        assert_types(
            tokens,
            [
                TokenType.OPEN_SQUARE,
                TokenType.TEXT_TYPE,
                TokenType.CLOSE_SQUARE,
                TokenType.OPTIONAL,
            ],
        )


class TestSpans:
    def test_symbol_spans(self, lex):
        tokens = lex("{ }")
        assert (tokens[0].start, tokens[0].end) == (0, 1)
        assert (tokens[1].start, tokens[1].end) == (1, 2)
        assert (tokens[2].start, tokens[2].end) == (2, 3)

    def test_len_is_span_width(self, lex):
        tokens = lex("model  User")
        assert [len(t) for t in tokens] == [5, 2, 4]


class TestToken:
    def test_token_is_frozen(self):
        tok = Token(TokenType.IDENTIFIER, "a", 0, 1)
        with pytest.raises(AttributeError):
            tok.text = "b"  # type: ignore[misc]

    def test_token_equality_is_structural(self):
        assert Token(TokenType.USE, "use", 3, 6) == Token(TokenType.USE, "use", 3, 6)


class TestTokenTypeProperties:
    def test_layout(self):
        assert TokenType.WHITESPACE.is_layout
        assert TokenType.LINE_BREAK.is_layout
        assert TokenType.COMMENT.is_layout
        assert not TokenType.IDENTIFIER.is_layout
        assert not TokenType.EOF.is_layout

    def test_keyword(self):
        assert TokenType.PLUGIN.is_keyword
        assert TokenType.DATE_TYPE.is_keyword
        assert not TokenType.BOOLEAN_LITERAL.is_keyword
        assert not TokenType.IDENTIFIER.is_keyword

    def test_literal(self):
        assert TokenType.STRING_LITERAL.is_literal
        assert TokenType.NUMBER_LITERAL.is_literal
        assert TokenType.BOOLEAN_LITERAL.is_literal
        assert not TokenType.STRING_TYPE.is_literal
