"""XXML command-line tool."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from xxml import __version__
from xxml.config import XXMLConfig, discover_config
from xxml.errors import (
    CompileError,
    DiagnosticRenderer,
    PathNotFoundError,
    TypeMismatchError,
)
from xxml.lexer import Lexer
from xxml.loader import load, read_source
from xxml.scope import Scope
from xxml.values import ScopeValue, StringValue, Variable, describe, kind_name

_KINDS: dict[str, type] = {
    "string": str,
    "number": float,
    "bool": bool,
    "array": list,
    "scope": Scope,
}


def _report(error: CompileError, renderer: DiagnosticRenderer) -> None:
    for diag in error.diagnostics:
        click.echo(renderer.render(diag), err=True)


def _load_or_exit(file: str, config: XXMLConfig) -> Scope:
    """Load one document, rendering diagnostics and exiting 1 on failure."""
    renderer = DiagnosticRenderer(color=config.diagnostics.color)
    try:
        source = read_source(file)
        renderer.add_source(source)
        return load(source.content, source.name, strict=config.lexer.strict)
    except CompileError as e:
        _report(e, renderer)
        raise SystemExit(1)


def _collect_files(target: Path, extensions: list[str]) -> list[Path]:
    if target.is_file():
        return [target]
    return sorted(
        p for p in target.rglob("*")
        if p.is_file() and p.suffix in extensions
    )


@click.group()
@click.version_option(__version__, prog_name="xxml")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool) -> None:
    """Tools for XXML configuration documents."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True))
@click.option("--strict/--lenient", default=None,
              help="Report unknown characters and unterminated strings (default from xxml.toml).")
@click.option("--color/--no-color", default=None, help="Colorize diagnostics.")
def check(path: str, strict: bool | None, color: bool | None) -> None:
    """Lex and parse every document under PATH."""
    target = Path(path)
    config = discover_config(target)
    if strict is not None:
        config.lexer.strict = strict
    if color is not None:
        config.diagnostics.color = color

    files = _collect_files(target, config.check.extensions)
    if not files:
        click.echo("warning: no documents found", err=True)
        return

    renderer = DiagnosticRenderer(color=config.diagnostics.color)
    failed = 0
    for doc in files:
        try:
            source = read_source(doc)
            renderer.add_source(source)
            load(source.content, source.name, strict=config.lexer.strict)
        except CompileError as e:
            failed += 1
            _report(e, renderer)

    if failed:
        click.echo(f"checked {len(files)} file(s), {failed} with errors", err=True)
        raise SystemExit(1)
    click.echo(f"checked {len(files)} file(s), no errors")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def tokens(file: str) -> None:
    """Print the token stream of FILE."""
    config = discover_config(Path(file))
    renderer = DiagnosticRenderer(color=config.diagnostics.color)
    try:
        source = read_source(file)
        renderer.add_source(source)
        toks = Lexer(source.content, source.name, strict=config.lexer.strict).lex()
    except CompileError as e:
        _report(e, renderer)
        raise SystemExit(1)

    for tok in toks:
        click.echo(f"{tok.span.start_line}:{tok.span.start_col}\t{tok.kind.name}\t{tok.value!r}")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def view(file: str) -> None:
    """Print the scope tree of FILE."""
    root = _load_or_exit(file, discover_config(Path(file)))
    _dump_scope(root, 0)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("path")
@click.option("--type", "kind", type=click.Choice(sorted(_KINDS)), default=None,
              help="Require the value to be of this kind.")
def get(file: str, path: str, kind: str | None) -> None:
    """Print the value at dotted PATH in FILE."""
    root = _load_or_exit(file, discover_config(Path(file)))

    try:
        if kind is not None:
            root.get(path, _KINDS[kind])
        elif not root.exists(path):
            raise PathNotFoundError(path)
    except (PathNotFoundError, TypeMismatchError) as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)

    value = root.resolve(path)
    if isinstance(value, ScopeValue):
        _dump_scope(value.scope, 0)
    elif isinstance(value, StringValue):
        click.echo(value.value)
    else:
        click.echo(describe(value))


@main.command()
def lsp() -> None:
    """Start the XXML language server on stdio."""
    from xxml.lsp import main as lsp_main

    lsp_main()


def _dump_scope(scope: Scope, depth: int) -> None:
    """Print a readable tree: namespaces first, then variables."""
    indent = "  " * depth
    for name, child in scope.namespaces.items():
        click.echo(f"{indent}[<{name}>]")
        _dump_scope(child, depth + 1)
    for name, var in scope.variables.items():
        _dump_variable(name, var, depth)


def _dump_variable(name: str, var: Variable, depth: int) -> None:
    indent = "  " * depth
    if isinstance(var.value, ScopeValue):
        click.echo(f"{indent}{name}: object")
        _dump_scope(var.value.scope, depth + 1)
    else:
        click.echo(f"{indent}{name}: {kind_name(var.value)} = {describe(var.value)}")
