"""Lexer for XXML documents.

Produces the full token list for a document in one pass. The lexer is
lenient by default: characters outside the language are dropped and an
unterminated string runs to the end of input. Existing documents rely on
that, so ``strict=True`` is opt-in and turns both cases into diagnostics.
"""

from __future__ import annotations

from xxml.errors import Diagnostic, DiagnosticLabel, LexError, Severity
from xxml.source import Span
from xxml.tokens import (
    BOOLEAN_SPELLINGS,
    PUNCTUATION,
    WHITESPACE,
    Token,
    TokenKind,
)

_DIGITS = frozenset("0123456789")
_IDENT_START = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_")
_IDENT_CHARS = _IDENT_START | _DIGITS


class Lexer:
    """Tokenizes XXML text."""

    def __init__(self, source: str, filename: str = "<stdin>", *, strict: bool = False) -> None:
        self.source = source
        self.filename = filename
        self.strict = strict
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []
        self.diagnostics: list[Diagnostic] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in WHITESPACE:
                self._advance()
            elif ch == '/' and self._peek(1) == '/':
                self._skip_line_comment()
            elif ch in PUNCTUATION:
                start_line, start_col = self.line, self.col
                self._advance()
                self._emit(PUNCTUATION[ch], ch, start_line, start_col)
            elif ch in _IDENT_START:
                self._lex_identifier()
            elif ch in _DIGITS or ch == '-' or ch == '.':
                self._lex_number()
            elif ch == '"':
                self._lex_string()
            else:
                self._skip_unknown()

        self._emit(TokenKind.EOF, "", self.line, self.col)

        if self.diagnostics:
            raise LexError(self.diagnostics)
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _emit(self, kind: TokenKind, value: str, start_line: int, start_col: int) -> Token:
        end_col = self.col - 1 if self.col > 1 else 1
        span = Span(self.filename, start_line, start_col, self.line, end_col)
        tok = Token(kind, value, span)
        self.tokens.append(tok)
        return tok

    def _error(self, code: str, message: str, line: int, col: int) -> None:
        span = Span(self.filename, line, col, line, col)
        self.diagnostics.append(
            Diagnostic(
                severity=Severity.ERROR,
                code=code,
                message=message,
                labels=[DiagnosticLabel(span=span, message="")],
            )
        )

    def _emit_word(self, word: str, start_line: int, start_col: int) -> None:
        if word in BOOLEAN_SPELLINGS:
            self._emit(TokenKind.BOOLEAN, BOOLEAN_SPELLINGS[word], start_line, start_col)
        elif word[0] in _IDENT_START:
            self._emit(TokenKind.IDENTIFIER, word, start_line, start_col)
        else:
            self._emit(TokenKind.NUMBER, word, start_line, start_col)

    # ── Comments and stray input ─────────────────────────────────

    def _skip_line_comment(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos] != '\n':
            self._advance()

    def _skip_unknown(self) -> None:
        line, col = self.line, self.col
        ch = self._advance()
        if self.strict:
            self._error("E101", f"unexpected character: {ch!r}", line, col)

    # ── Identifiers ──────────────────────────────────────────────

    def _lex_identifier(self) -> None:
        start_line = self.line
        start_col = self.col
        text = []
        while self.pos < len(self.source) and self.source[self.pos] in _IDENT_CHARS:
            text.append(self._advance())
        self._emit_word(''.join(text), start_line, start_col)

    # ── Numbers ──────────────────────────────────────────────────

    def _lex_number(self) -> None:
        start_line = self.line
        start_col = self.col
        text = []
        has_decimal = False

        if self.source[self.pos] == '-':
            text.append(self._advance())

        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch == '.':
                # A second dot ends this number and starts the next one
                if has_decimal:
                    break
                has_decimal = True
            elif ch not in _DIGITS:
                break
            text.append(self._advance())

        self._emit_word(''.join(text), start_line, start_col)

    # ── Strings ──────────────────────────────────────────────────

    def _lex_string(self) -> None:
        start_line = self.line
        start_col = self.col
        self._advance()  # skip opening "
        text = []

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            if self.source[self.pos] == '\\':
                self._advance()
                # The escaped character is taken literally: \n is "n"
                if self.pos < len(self.source):
                    text.append(self._advance())
            else:
                text.append(self._advance())

        if self.pos >= len(self.source):
            if self.strict:
                self._error("E102", "unterminated string literal", start_line, start_col)
        else:
            self._advance()  # skip closing "

        self._emit(TokenKind.STRING_LITERAL, ''.join(text), start_line, start_col)


def tokenize(text: str, filename: str = "<string>", *, strict: bool = False) -> list[Token]:
    """Tokenize ``text``; the result always ends with a single EOF token."""
    return Lexer(text, filename, strict=strict).lex()
