"""XXML: a small declarative configuration language."""

from __future__ import annotations

from xxml.errors import (
    CompileError,
    LexError,
    ParseError,
    PathNotFoundError,
    TypeMismatchError,
    XXMLError,
)
from xxml.lexer import Lexer, tokenize
from xxml.loader import load, load_file
from xxml.parser import Parser, parse
from xxml.scope import Scope
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

__version__ = "0.1.0"

__all__ = [
    "ArrayValue",
    "BooleanValue",
    "CompileError",
    "LexError",
    "Lexer",
    "NumberValue",
    "ParseError",
    "Parser",
    "PathNotFoundError",
    "Scope",
    "ScopeValue",
    "StringValue",
    "Token",
    "TokenKind",
    "TypeMismatchError",
    "Value",
    "Variable",
    "XXMLError",
    "load",
    "load_file",
    "parse",
    "tokenize",
]
