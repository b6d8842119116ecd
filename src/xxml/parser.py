"""Parser for XXML documents.

Recursive descent with one token of lookahead. The grammar reuses ``[ ]``
for two things: at statement level ``[<Name> ...]`` opens a namespace,
on the right of ``=`` it is an array literal. Which one applies is
decided purely by where the bracket appears.

There is no error recovery. The first violation raises ParseError and
the partially built tree is discarded. A token that cannot start a
statement is skipped, as existing documents expect; ``strict=True``
rejects it instead.
"""

from __future__ import annotations

from typing import NoReturn

from xxml.errors import Diagnostic, DiagnosticLabel, ParseError, Severity
from xxml.scope import Scope
from xxml.source import Span
from xxml.tokens import Token, TokenKind
from xxml.values import (
    ArrayValue,
    BooleanValue,
    NumberValue,
    ScopeValue,
    StringValue,
    Value,
    Variable,
)

_DISPLAY: dict[TokenKind, str] = {
    TokenKind.TAG_OPEN: "'<'",
    TokenKind.TAG_CLOSE: "'>'",
    TokenKind.BRACKET_OPEN: "'['",
    TokenKind.BRACKET_CLOSE: "']'",
    TokenKind.BRACE_OPEN: "'{'",
    TokenKind.BRACE_CLOSE: "'}'",
    TokenKind.ASSIGN: "'='",
    TokenKind.COMMA: "','",
    TokenKind.IDENTIFIER: "identifier",
    TokenKind.STRING_LITERAL: "string",
    TokenKind.NUMBER: "number",
    TokenKind.BOOLEAN: "boolean",
    TokenKind.EOF: "end of input",
}


def _describe(tok: Token) -> str:
    if tok.kind in (TokenKind.IDENTIFIER, TokenKind.NUMBER, TokenKind.BOOLEAN):
        return f"{_DISPLAY[tok.kind]} {tok.value!r}"
    if tok.kind == TokenKind.STRING_LITERAL:
        return "string literal"
    return _DISPLAY[tok.kind]


class Parser:
    """Parses a list of tokens into a root Scope."""

    def __init__(self, tokens: list[Token], filename: str = "<stdin>", *, strict: bool = False) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            end = tokens[-1].span if tokens else Span(filename, 1, 1, 1, 1)
            tokens = [*tokens, Token(TokenKind.EOF, "", end)]
        self.tokens = tokens
        self.pos = 0
        self.filename = filename
        self.strict = strict

    # ── Token access ─────────────────────────────────────────────

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _at(self, kind: TokenKind) -> bool:
        return self.tokens[self.pos].kind == kind

    def _at_end(self) -> bool:
        return self._at(TokenKind.EOF)

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def _consume(self, kind: TokenKind, message: str) -> Token:
        if self._at(kind):
            return self._advance()
        tok = self._peek()
        self._fail("E201", f"{message}, found {_describe(tok)}", tok.span)

    def _fail(self, code: str, message: str, span: Span, notes: list[str] | None = None) -> NoReturn:
        raise ParseError([
            Diagnostic(
                severity=Severity.ERROR,
                code=code,
                message=message,
                labels=[DiagnosticLabel(span=span, message="")],
                notes=notes or [],
            )
        ])

    def _span(self, start: Span, end: Span) -> Span:
        return Span(
            start.file,
            start.start_line, start.start_col,
            end.end_line, end.end_col,
        )

    # ── Statements ───────────────────────────────────────────────

    def parse(self) -> Scope:
        """Parse the whole token list into a fresh root scope."""
        self.pos = 0
        root = Scope()
        try:
            while not self._at_end():
                self._parse_statement(root)
        except RecursionError:
            tok = self._peek()
            self._fail("E204", "document is nested too deeply", tok.span)
        return root

    def _parse_statement(self, scope: Scope) -> None:
        tok = self._peek()
        if tok.kind == TokenKind.TAG_OPEN:
            self._parse_tag(scope)
        elif tok.kind == TokenKind.BRACKET_OPEN:
            self._parse_namespace(scope)
        elif tok.kind == TokenKind.IDENTIFIER:
            self._parse_assignment(scope)
        elif not self.strict:
            self._advance()
        else:
            self._fail(
                "E201",
                f"expected a tag, namespace or assignment, found {_describe(tok)}",
                tok.span,
                notes=["statements look like `<Name = value>`, `[<Name> ...]` or `Name = value`"],
            )

    def _parse_tag(self, scope: Scope) -> None:
        self._consume(TokenKind.TAG_OPEN, "expected '<'")
        name_tok = self._consume(TokenKind.IDENTIFIER, "expected tag name")
        self._consume(TokenKind.ASSIGN, "expected '=' after tag name")
        value = self._parse_value()
        self._consume(TokenKind.TAG_CLOSE, "expected '>'")

        scope.variables[name_tok.value] = Variable(name_tok.value, value, name_tok.span)

    def _parse_namespace(self, parent: Scope) -> None:
        start = self._consume(TokenKind.BRACKET_OPEN, "expected '['").span
        self._consume(TokenKind.TAG_OPEN, "expected '<' after '['")
        name_tok = self._consume(TokenKind.IDENTIFIER, "expected namespace name")
        self._consume(TokenKind.TAG_CLOSE, "expected '>' after namespace name")

        child = Scope()
        while not self._at(TokenKind.BRACKET_CLOSE) and not self._at_end():
            self._parse_statement(child)

        end = self._consume(TokenKind.BRACKET_CLOSE, f"expected ']' to close namespace {name_tok.value!r}").span
        child.span = self._span(start, end)
        parent.namespaces[name_tok.value] = child

    def _parse_assignment(self, scope: Scope) -> None:
        name_tok = self._consume(TokenKind.IDENTIFIER, "expected identifier")
        self._consume(TokenKind.ASSIGN, "expected '=' after identifier")

        if self._at(TokenKind.BRACE_OPEN):
            value: Value = self._parse_object()
        else:
            value = self._parse_value()

        scope.variables[name_tok.value] = Variable(name_tok.value, value, name_tok.span)

    def _parse_object(self) -> ScopeValue:
        start = self._consume(TokenKind.BRACE_OPEN, "expected '{'").span

        child = Scope()
        while not self._at(TokenKind.BRACE_CLOSE) and not self._at_end():
            self._parse_assignment(child)

        end = self._consume(TokenKind.BRACE_CLOSE, "expected '}'").span
        child.span = self._span(start, end)
        return ScopeValue(child)

    # ── Values ───────────────────────────────────────────────────

    def _parse_value(self) -> Value:
        tok = self._peek()

        if tok.kind == TokenKind.STRING_LITERAL:
            self._advance()
            return StringValue(tok.value)
        if tok.kind == TokenKind.NUMBER:
            self._advance()
            return NumberValue(self._to_number(tok))
        if tok.kind == TokenKind.BOOLEAN:
            self._advance()
            return BooleanValue(tok.value == "true")
        if tok.kind == TokenKind.BRACKET_OPEN:
            return self._parse_array()

        self._fail("E202", f"expected value, found {_describe(tok)}", tok.span)

    def _parse_array(self) -> ArrayValue:
        self._consume(TokenKind.BRACKET_OPEN, "expected '['")

        items: list[Value] = []
        if not self._at(TokenKind.BRACKET_CLOSE):
            items.append(self._parse_value())
            while self._at(TokenKind.COMMA):
                self._advance()
                items.append(self._parse_value())

        self._consume(TokenKind.BRACKET_CLOSE, "expected ']'")
        return ArrayValue(tuple(items))

    def _to_number(self, tok: Token) -> float:
        try:
            return float(tok.value)
        except ValueError:
            self._fail("E203", f"malformed number {tok.value!r}", tok.span)


def parse(tokens: list[Token], filename: str = "<string>", *, strict: bool = False) -> Scope:
    """Parse a token list into a root scope."""
    return Parser(tokens, filename, strict=strict).parse()
