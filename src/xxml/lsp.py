"""XXML Language Server — pygls-based LSP for .xxml files.

Provides diagnostics, document symbols and hover via stdio transport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer
from pygls.uris import to_fs_path

from xxml import __version__
from xxml.config import discover_config
from xxml.errors import CompileError, Diagnostic, Severity
from xxml.lexer import Lexer
from xxml.parser import Parser
from xxml.scope import Scope
from xxml.source import Span
from xxml.tokens import Token, TokenKind
from xxml.values import ScopeValue, Variable, describe, kind_name

logger = logging.getLogger(__name__)

# ── Conversion helpers ────────────────────────────────────────────

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.NOTE: lsp.DiagnosticSeverity.Information,
}

# Value kind → LSP SymbolKind
_SYMBOL_KIND_MAP = {
    "string": lsp.SymbolKind.String,
    "number": lsp.SymbolKind.Number,
    "bool": lsp.SymbolKind.Boolean,
    "array": lsp.SymbolKind.Array,
    "scope": lsp.SymbolKind.Object,
}


def span_to_range(span: Span) -> lsp.Range:
    """Convert a 1-indexed inclusive Span to a 0-indexed LSP Range."""
    return lsp.Range(
        start=lsp.Position(line=span.start_line - 1, character=span.start_col - 1),
        end=lsp.Position(line=span.end_line - 1, character=span.end_col),
    )


def _compile_diag(d: Diagnostic) -> lsp.Diagnostic:
    """Convert an xxml Diagnostic to an LSP Diagnostic."""
    span_range = lsp.Range(start=lsp.Position(0, 0), end=lsp.Position(0, 0))
    if d.labels:
        span_range = span_to_range(d.labels[0].span)
    return lsp.Diagnostic(
        range=span_range,
        severity=_SEVERITY_MAP.get(d.severity, lsp.DiagnosticSeverity.Error),
        source="xxml",
        code=d.code,
        message=f"[{d.code}] {d.message}",
    )


# ── Per-document state ────────────────────────────────────────────


@dataclass
class DocumentState:
    """Cached analysis results for a single open document."""

    source: str = ""
    tokens: list[Token] = field(default_factory=list)
    root: Scope | None = None
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)


# ── Server ────────────────────────────────────────────────────────

server = LanguageServer(
    "xxml-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)
_state: dict[str, DocumentState] = {}


def _analyze(uri: str, source: str, *, strict: bool = False) -> DocumentState:
    """Run Lexer → Parser, cache results, return state."""
    ds = DocumentState(source=source)
    try:
        ds.tokens = Lexer(source, uri, strict=strict).lex()
        ds.root = Parser(ds.tokens, uri, strict=strict).parse()
    except CompileError as e:
        ds.diagnostics = [_compile_diag(d) for d in e.diagnostics]
    logger.debug("analyzed %s: %d diagnostics", uri, len(ds.diagnostics))
    _state[uri] = ds
    return ds


def _strict_for(uri: str) -> bool:
    """Strictness from the xxml.toml governing the document, if any."""
    path = to_fs_path(uri) if uri.startswith("file:") else None
    if path is None:
        return False
    return discover_config(Path(path).parent).lexer.strict


def _variable_symbol(name: str, var: Variable) -> lsp.DocumentSymbol | None:
    if var.span is None:
        return None
    kind = kind_name(var.value)
    children: list[lsp.DocumentSymbol] = []
    full = var.span
    if isinstance(var.value, ScopeValue):
        children = _scope_symbols(var.value.scope)
        if var.value.scope.span is not None:
            end = var.value.scope.span
            full = Span(full.file, full.start_line, full.start_col, end.end_line, end.end_col)
        detail = "object"
    else:
        detail = describe(var.value)
    return lsp.DocumentSymbol(
        name=name,
        kind=_SYMBOL_KIND_MAP[kind],
        range=span_to_range(full),
        selection_range=span_to_range(var.span),
        detail=detail,
        children=children,
    )


def _scope_symbols(scope: Scope) -> list[lsp.DocumentSymbol]:
    """Build the outline for a scope: namespaces, then variables."""
    symbols: list[lsp.DocumentSymbol] = []
    for name, child in scope.namespaces.items():
        if child.span is None:
            continue
        rng = span_to_range(child.span)
        symbols.append(lsp.DocumentSymbol(
            name=name,
            kind=lsp.SymbolKind.Namespace,
            range=rng,
            selection_range=rng,
            detail="namespace",
            children=_scope_symbols(child),
        ))
    for name, var in scope.variables.items():
        sym = _variable_symbol(name, var)
        if sym is not None:
            symbols.append(sym)
    return symbols


def _token_index_at(tokens: list[Token], line: int, character: int) -> int | None:
    """Index of the token under a 0-indexed LSP position, if any."""
    for i, tok in enumerate(tokens):
        if tok.kind == TokenKind.EOF:
            break
        if tok.span.contains(line + 1, character + 1):
            return i
    return None


def _hover_text(ds: DocumentState, line: int, character: int) -> str | None:
    """Markdown describing the variable or namespace named under the cursor."""
    if ds.root is None:
        return None
    idx = _token_index_at(ds.tokens, line, character)
    if idx is None or ds.tokens[idx].kind != TokenKind.IDENTIFIER:
        return None
    tok = ds.tokens[idx]

    # `[ < Name >` — the namespace span starts at the bracket
    header: Span | None = None
    if (idx >= 2 and ds.tokens[idx - 2].kind == TokenKind.BRACKET_OPEN
            and ds.tokens[idx - 1].kind == TokenKind.TAG_OPEN):
        header = ds.tokens[idx - 2].span

    for path, node in ds.root.walk():
        if isinstance(node, Variable) and node.span == tok.span:
            if isinstance(node.value, ScopeValue):
                return f"**object** `{path}`"
            return f"**{kind_name(node.value)}** `{path}` = `{describe(node.value)}`"
        if (isinstance(node, Scope) and header is not None and node.span is not None
                and (node.span.start_line, node.span.start_col)
                == (header.start_line, header.start_col)):
            return f"**namespace** `{path}`"
    return None


# ── LSP Feature Handlers ─────────────────────────────────────────


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    uri = params.text_document.uri
    ds = _analyze(uri, params.text_document.text, strict=_strict_for(uri))
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    uri = params.text_document.uri
    # Full sync — take last content change
    source = params.content_changes[-1].text if params.content_changes else ""
    ds = _analyze(uri, source, strict=_strict_for(uri))
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    _state.pop(params.text_document.uri, None)


@server.feature(lsp.TEXT_DOCUMENT_HOVER)
def hover(params: lsp.HoverParams) -> lsp.Hover | None:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return None
    text = _hover_text(ds, params.position.line, params.position.character)
    if text is None:
        return None
    return lsp.Hover(contents=lsp.MarkupContent(
        kind=lsp.MarkupKind.Markdown,
        value=text,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbol(params: lsp.DocumentSymbolParams) -> list[lsp.DocumentSymbol] | None:
    ds = _state.get(params.text_document.uri)
    if ds is None or ds.root is None:
        return None
    return _scope_symbols(ds.root)


# ── Entry point ──────────────────────────────────────────────────


def main() -> None:
    """Start the XXML language server on stdio."""
    server.start_io()
