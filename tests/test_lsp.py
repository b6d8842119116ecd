"""Tests for the XXML LSP server."""

from __future__ import annotations

from lsprotocol import types as lsp
from pygls.uris import from_fs_path

from xxml.errors import Severity
from xxml.lsp import (
    _SEVERITY_MAP,
    _analyze,
    _hover_text,
    _scope_symbols,
    _state,
    _strict_for,
    _token_index_at,
    did_open,
    server,
    span_to_range,
)
from xxml.source import Span

SOURCE = (
    "[<Graphics>\n"
    "  <Width = 1920>\n"
    "]\n"
    "Player = { Speed = 4 }\n"
)


class TestSpanConversion:
    def test_span_to_range_basic(self):
        r = span_to_range(Span("test.xxml", 1, 1, 1, 5))
        assert (r.start.line, r.start.character) == (0, 0)
        assert (r.end.line, r.end.character) == (0, 5)

    def test_span_to_range_multiline(self):
        r = span_to_range(Span("test.xxml", 5, 3, 7, 10))
        assert (r.start.line, r.start.character) == (4, 2)
        assert (r.end.line, r.end.character) == (6, 10)


class TestSeverityMap:
    def test_error_maps(self):
        assert _SEVERITY_MAP[Severity.ERROR] == lsp.DiagnosticSeverity.Error

    def test_note_maps(self):
        assert _SEVERITY_MAP[Severity.NOTE] == lsp.DiagnosticSeverity.Information


class TestAnalyze:
    def test_clean_document(self):
        ds = _analyze("file:///clean.xxml", SOURCE)
        assert ds.diagnostics == []
        assert ds.root is not None
        assert ds.root.exists("Graphics.Width")
        assert _state["file:///clean.xxml"] is ds

    def test_parse_error_becomes_diagnostic(self):
        ds = _analyze("file:///bad.xxml", "<A=>")
        assert ds.root is None
        assert len(ds.diagnostics) == 1
        diag = ds.diagnostics[0]
        assert diag.code == "E202"
        assert diag.message.startswith("[E202]")
        assert diag.source == "xxml"
        assert (diag.range.start.line, diag.range.start.character) == (0, 3)

    def test_strict_lex_errors(self):
        ds = _analyze("file:///odd.xxml", "<A=1> @ #", strict=True)
        assert [d.code for d in ds.diagnostics] == ["E101", "E101"]
        assert ds.tokens == []

    def test_strict_stray_token(self):
        ds = _analyze("file:///stray.xxml", "<A=1> ] <B=2>", strict=True)
        assert [d.code for d in ds.diagnostics] == ["E201"]
        assert _analyze("file:///stray.xxml", "<A=1> ] <B=2>").diagnostics == []


class TestProjectConfig:
    def _project(self, tmp_path, strict):
        (tmp_path / "xxml.toml").write_text(f"[lexer]\nstrict = {str(strict).lower()}\n")
        return from_fs_path(str(tmp_path / "game.xxml"))

    def test_strict_from_config(self, tmp_path):
        assert _strict_for(self._project(tmp_path, True)) is True
        assert _strict_for(self._project(tmp_path, False)) is False

    def test_non_file_uri_is_lenient(self):
        assert _strict_for("untitled:Untitled-1") is False

    def test_did_open_uses_config(self, tmp_path, monkeypatch):
        published = []
        monkeypatch.setattr(server, "text_document_publish_diagnostics", published.append)
        uri = self._project(tmp_path, True)
        did_open(lsp.DidOpenTextDocumentParams(text_document=lsp.TextDocumentItem(
            uri=uri, language_id="xxml", version=1, text="<A=1> @",
        )))
        assert [d.code for d in published[0].diagnostics] == ["E101"]
        assert published[0].uri == uri


class TestDocumentSymbols:
    def test_outline(self):
        ds = _analyze("file:///outline.xxml", SOURCE)
        symbols = _scope_symbols(ds.root)
        assert [s.name for s in symbols] == ["Graphics", "Player"]

        graphics, player = symbols
        assert graphics.kind == lsp.SymbolKind.Namespace
        assert [c.name for c in graphics.children] == ["Width"]
        assert graphics.children[0].kind == lsp.SymbolKind.Number
        assert graphics.range.end.line == 2

        assert player.kind == lsp.SymbolKind.Object
        assert [c.name for c in player.children] == ["Speed"]
        assert player.selection_range.end.character == 6
        assert player.range.end.character == 22


class TestHover:
    def _ds(self):
        return _analyze("file:///hover.xxml", SOURCE)

    def test_token_index_at(self):
        ds = self._ds()
        idx = _token_index_at(ds.tokens, 1, 3)
        assert ds.tokens[idx].value == "Width"
        assert _token_index_at(ds.tokens, 10, 0) is None

    def test_hover_tag(self):
        assert _hover_text(self._ds(), 1, 3) == "**number** `Graphics.Width` = `1920.0`"

    def test_hover_namespace(self):
        assert _hover_text(self._ds(), 0, 3) == "**namespace** `Graphics`"

    def test_hover_object(self):
        assert _hover_text(self._ds(), 3, 0) == "**object** `Player`"

    def test_hover_object_member(self):
        assert _hover_text(self._ds(), 3, 11) == "**number** `Player.Speed` = `4.0`"

    def test_hover_punctuation(self):
        assert _hover_text(self._ds(), 3, 7) is None

    def test_hover_without_tree(self):
        ds = _analyze("file:///broken.xxml", "<A=>")
        assert _hover_text(ds, 0, 1) is None
