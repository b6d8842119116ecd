"""Tests for the XXML lexer."""

from __future__ import annotations

import pytest

from tests.helpers import diagnostic_codes
from xxml.errors import LexError
from xxml.lexer import Lexer, tokenize
from xxml.tokens import TokenKind


def lex(source: str) -> list[tuple[TokenKind, str]]:
    """Helper: lex source and return (kind, value) pairs, excluding EOF."""
    tokens = Lexer(source).lex()
    return [(t.kind, t.value) for t in tokens if t.kind != TokenKind.EOF]


def kinds(source: str) -> list[TokenKind]:
    """Helper: lex source and return just the token kinds, excluding EOF."""
    tokens = Lexer(source).lex()
    return [t.kind for t in tokens if t.kind != TokenKind.EOF]


class TestLexerBasic:
    def test_empty_source(self):
        tokens = Lexer("").lex()
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF

    def test_single_eof_at_end(self):
        tokens = tokenize("<A = 1>")
        assert tokens[-1].kind == TokenKind.EOF
        assert [t.kind for t in tokens].count(TokenKind.EOF) == 1

    def test_punctuation(self):
        assert kinds("< > [ ] { } = ,") == [
            TokenKind.TAG_OPEN,
            TokenKind.TAG_CLOSE,
            TokenKind.BRACKET_OPEN,
            TokenKind.BRACKET_CLOSE,
            TokenKind.BRACE_OPEN,
            TokenKind.BRACE_CLOSE,
            TokenKind.ASSIGN,
            TokenKind.COMMA,
        ]

    def test_whitespace_is_skipped(self):
        assert lex(" \t\r\n\v\fName\n") == [(TokenKind.IDENTIFIER, "Name")]

    def test_identifier(self):
        assert lex("Window_Title2") == [(TokenKind.IDENTIFIER, "Window_Title2")]

    def test_underscore_identifier(self):
        assert lex("_private") == [(TokenKind.IDENTIFIER, "_private")]

    def test_tag(self):
        assert lex("<Width=1920>") == [
            (TokenKind.TAG_OPEN, "<"),
            (TokenKind.IDENTIFIER, "Width"),
            (TokenKind.ASSIGN, "="),
            (TokenKind.NUMBER, "1920"),
            (TokenKind.TAG_CLOSE, ">"),
        ]


class TestLexerLiterals:
    def test_integer_text_is_kept_raw(self):
        assert lex("42") == [(TokenKind.NUMBER, "42")]

    def test_negative_decimal(self):
        assert lex("-3.25") == [(TokenKind.NUMBER, "-3.25")]

    def test_leading_dot(self):
        assert lex(".5") == [(TokenKind.NUMBER, ".5")]

    def test_second_dot_starts_next_number(self):
        assert lex("1.2.3") == [(TokenKind.NUMBER, "1.2"), (TokenKind.NUMBER, ".3")]

    def test_lone_minus_is_a_number_token(self):
        assert lex("-") == [(TokenKind.NUMBER, "-")]

    def test_number_stops_at_letter(self):
        assert lex("12px") == [(TokenKind.NUMBER, "12"), (TokenKind.IDENTIFIER, "px")]

    def test_string(self):
        assert lex('"hello world"') == [(TokenKind.STRING_LITERAL, "hello world")]

    def test_empty_string(self):
        assert lex('""') == [(TokenKind.STRING_LITERAL, "")]

    def test_escape_copies_next_character(self):
        assert lex(r'"say \"hi\""') == [(TokenKind.STRING_LITERAL, 'say "hi"')]

    def test_escape_does_not_interpret_codes(self):
        assert lex(r'"a\nb\\c"') == [(TokenKind.STRING_LITERAL, "anb\\c")]

    def test_unterminated_string_runs_to_end(self):
        assert lex('"abc <A=1>') == [(TokenKind.STRING_LITERAL, "abc <A=1>")]

    def test_string_keeps_comment_markers(self):
        assert lex('"http://example.com"') == [(TokenKind.STRING_LITERAL, "http://example.com")]


class TestLexerBooleans:
    def test_true_false(self):
        assert lex("true false") == [
            (TokenKind.BOOLEAN, "true"),
            (TokenKind.BOOLEAN, "false"),
        ]

    def test_legacy_false_spelling(self):
        assert lex("10297108115101") == [(TokenKind.BOOLEAN, "false")]

    def test_legacy_true_spelling(self):
        assert lex("116114117101") == [(TokenKind.BOOLEAN, "true")]

    def test_legacy_spelling_must_match_whole_token(self):
        assert lex("1161141171012") == [(TokenKind.NUMBER, "1161141171012")]
        assert lex("-116114117101") == [(TokenKind.NUMBER, "-116114117101")]

    def test_boolean_prefix_is_identifier(self):
        assert lex("trueish") == [(TokenKind.IDENTIFIER, "trueish")]

    def test_capitalised_is_identifier(self):
        assert lex("True") == [(TokenKind.IDENTIFIER, "True")]


class TestLexerComments:
    def test_line_comment_skipped(self):
        assert lex("// note\n<A=1>") == lex("<A=1>")

    def test_comment_at_end_of_input(self):
        assert lex("<A=1> // trailing") == lex("<A=1>")

    def test_single_slash_is_dropped(self):
        assert lex("A / B") == [(TokenKind.IDENTIFIER, "A"), (TokenKind.IDENTIFIER, "B")]


class TestLexerLenient:
    def test_unknown_characters_dropped(self):
        assert lex("<A@=#1>") == lex("<A=1>")

    def test_non_ascii_letters_dropped(self):
        assert lex("é") == []


class TestLexerStrict:
    def test_unknown_character_reported(self):
        with pytest.raises(LexError) as exc:
            Lexer("<A=1> @", strict=True).lex()
        assert diagnostic_codes(exc.value) == ["E101"]
        assert "'@'" in exc.value.diagnostics[0].message

    def test_unterminated_string_reported(self):
        with pytest.raises(LexError) as exc:
            Lexer('<A="abc', strict=True).lex()
        assert diagnostic_codes(exc.value) == ["E102"]

    def test_all_problems_collected(self):
        with pytest.raises(LexError) as exc:
            Lexer('$ % "open', strict=True).lex()
        assert diagnostic_codes(exc.value) == ["E101", "E101", "E102"]

    def test_clean_input_passes(self):
        tokens = Lexer("<A=1>", strict=True).lex()
        assert tokens[-1].kind == TokenKind.EOF


class TestLexerSpans:
    def test_spans_track_lines_and_columns(self):
        tokens = Lexer("<A=1>\n  Name = \"x\"", "doc.xxml").lex()
        name = tokens[5]
        assert name.value == "Name"
        assert (name.span.file, name.span.start_line, name.span.start_col) == ("doc.xxml", 2, 3)
        assert name.span.end_col == 6

    def test_string_span_covers_quotes(self):
        tokens = Lexer('"ab"').lex()
        span = tokens[0].span
        assert (span.start_col, span.end_col) == (1, 4)
