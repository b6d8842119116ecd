"""Shared test helpers for the XXML test suite."""

from __future__ import annotations

from xxml.lexer import Lexer
from xxml.parser import Parser
from xxml.scope import Scope


def parse(source: str, *, strict: bool = False) -> Scope:
    """Lex and parse source, return the root scope."""
    tokens = Lexer(source, "<test>", strict=strict).lex()
    return Parser(tokens, "<test>", strict=strict).parse()


def diagnostic_codes(error) -> list[str]:
    """Codes carried by a CompileError, in order."""
    return [d.code for d in error.diagnostics]
