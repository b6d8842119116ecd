"""Load XXML documents from text or from disk."""

from __future__ import annotations

import logging
from pathlib import Path

from xxml.errors import CompileError, Diagnostic, DiagnosticLabel, Severity
from xxml.lexer import Lexer
from xxml.parser import Parser
from xxml.scope import Scope
from xxml.source import SourceFile, Span

logger = logging.getLogger(__name__)


def load(text: str, filename: str = "<string>", *, strict: bool = False) -> Scope:
    """Lex and parse ``text`` into a new root scope.

    Raises LexError (strict mode only) or ParseError.
    """
    tokens = Lexer(text, filename, strict=strict).lex()
    logger.debug("lexed %s: %d tokens", filename, len(tokens))
    root = Parser(tokens, filename, strict=strict).parse()
    logger.debug(
        "parsed %s: %d variables, %d namespaces at top level",
        filename, len(root.variables), len(root.namespaces),
    )
    return root


def read_source(path: str | Path) -> SourceFile:
    """Read a UTF-8 document from disk.

    Undecodable bytes raise CompileError with an ``E001`` diagnostic
    pointing at the first bad byte.
    """
    path = Path(path)
    logger.debug("reading %s", path)
    try:
        return SourceFile.read(path)
    except UnicodeDecodeError as e:
        before = e.object[:e.start]
        line = before.count(b"\n") + 1
        col = e.start - (before.rfind(b"\n") + 1) + 1
        raise CompileError([
            Diagnostic(
                severity=Severity.ERROR,
                code="E001",
                message=f"document is not valid UTF-8: {e.reason}",
                labels=[DiagnosticLabel(span=Span(str(path), line, col, line, col), message="")],
            )
        ]) from None


def load_file(path: str | Path, *, strict: bool = False) -> Scope:
    """Read a UTF-8 document from disk and load it."""
    source = read_source(path)
    return load(source.content, source.name, strict=strict)
