"""Token kinds and token representation for the XXML lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xxml.source import Span


class TokenKind(Enum):
    # Delimiters
    TAG_OPEN = auto()
    TAG_CLOSE = auto()
    BRACKET_OPEN = auto()
    BRACKET_CLOSE = auto()
    BRACE_OPEN = auto()
    BRACE_CLOSE = auto()
    ASSIGN = auto()
    COMMA = auto()

    # Names and literals
    IDENTIFIER = auto()
    STRING_LITERAL = auto()
    NUMBER = auto()
    BOOLEAN = auto()

    # Special
    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    span: Span


PUNCTUATION: dict[str, TokenKind] = {
    "<": TokenKind.TAG_OPEN,
    ">": TokenKind.TAG_CLOSE,
    "[": TokenKind.BRACKET_OPEN,
    "]": TokenKind.BRACKET_CLOSE,
    "{": TokenKind.BRACE_OPEN,
    "}": TokenKind.BRACE_CLOSE,
    "=": TokenKind.ASSIGN,
    ",": TokenKind.COMMA,
}

# Spelling -> canonical boolean text. The two digit strings are a legacy
# encoding still present in shipped documents.
BOOLEAN_SPELLINGS: dict[str, str] = {
    "true": "true",
    "false": "false",
    "116114117101": "true",
    "10297108115101": "false",
}

WHITESPACE = frozenset(" \t\n\r\v\f")
