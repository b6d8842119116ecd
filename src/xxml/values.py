"""The closed set of values a document can hold."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from xxml.scope import Scope
    from xxml.source import Span


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class NumberValue:
    value: float


@dataclass(frozen=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True)
class ArrayValue:
    items: tuple[Value, ...]


@dataclass(frozen=True)
class ScopeValue:
    """An anonymous object: a nested scope held by a variable."""

    scope: Scope


Value = Union[StringValue, NumberValue, BooleanValue, ArrayValue, ScopeValue]


@dataclass
class Variable:
    name: str
    value: Value
    span: Span | None = field(default=None, compare=False, repr=False)


def kind_name(value: Value) -> str:
    """Human-readable name of the arm a value holds."""
    match value:
        case StringValue():
            return "string"
        case NumberValue():
            return "number"
        case BooleanValue():
            return "bool"
        case ArrayValue():
            return "array"
        case ScopeValue():
            return "scope"
    raise TypeError(f"not an XXML value: {value!r}")


def describe(value: Value) -> str:
    """Short source-like rendering used by the tree view and hover text."""
    match value:
        case StringValue(text):
            return '"' + text.replace('\\', '\\\\').replace('"', '\\"') + '"'
        case NumberValue(number):
            return repr(number)
        case BooleanValue(flag):
            return "true" if flag else "false"
        case ArrayValue(items):
            return "[" + ", ".join(describe(item) for item in items) + "]"
        case ScopeValue(scope):
            return f"{{...}} ({len(scope.variables)} entries)"
    raise TypeError(f"not an XXML value: {value!r}")
