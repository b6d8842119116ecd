"""Scope tree and dotted-path resolution.

A scope reaches its children two ways: by name through ``namespaces``
(declared ``[<Name> ...]``), and through a variable whose value is a
``ScopeValue`` (declared ``Name = { ... }``). Path resolution walks both
kinds of edge the same way, namespaces first.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from xxml.errors import PathNotFoundError, TypeMismatchError
from xxml.source import Span
from xxml.values import (
    ArrayValue,
    BooleanValue,
    NumberValue,
    ScopeValue,
    StringValue,
    Value,
    Variable,
    kind_name,
)


@dataclass
class Scope:
    variables: dict[str, Variable] = field(default_factory=dict)
    namespaces: dict[str, Scope] = field(default_factory=dict)
    span: Span | None = field(default=None, compare=False, repr=False)

    def exists(self, path: str) -> bool:
        """Whether ``path`` resolves to a variable or namespace. Never raises."""
        return self.resolve(path) is not None

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def resolve(self, path: str) -> Value | None:
        """Resolve a dotted path; a namespace hit comes back as a ScopeValue."""
        segments = path.split(".")
        scope = self
        for i, key in enumerate(segments):
            last = i == len(segments) - 1

            child = scope.namespaces.get(key)
            if child is not None:
                if last:
                    return ScopeValue(child)
                scope = child
                continue

            var = scope.variables.get(key)
            if var is None:
                return None
            if last:
                return var.value
            if not isinstance(var.value, ScopeValue):
                return None
            scope = var.value.scope

        return None

    def get(self, path: str, kind: type) -> Any:
        """Return the value at ``path`` if it holds ``kind``.

        ``kind`` is one of ``str``, ``float``, ``bool``, ``list`` or
        ``Scope``. Arrays come back as a new list of values; scopes come
        back as the node itself.

        Raises PathNotFoundError or TypeMismatchError.
        """
        if kind not in _KIND_NAMES:
            raise TypeError(f"unsupported value kind: {kind!r}")

        value = self.resolve(path)
        if value is None:
            raise PathNotFoundError(path)

        match value:
            case StringValue(text) if kind is str:
                return text
            case NumberValue(number) if kind is float:
                return number
            case BooleanValue(flag) if kind is bool:
                return flag
            case ArrayValue(items) if kind is list:
                return list(items)
            case ScopeValue(scope) if kind is Scope:
                return scope
        raise TypeMismatchError(path, _KIND_NAMES[kind], kind_name(value))

    def get_string(self, path: str) -> str:
        return self.get(path, str)

    def get_number(self, path: str) -> float:
        return self.get(path, float)

    def get_bool(self, path: str) -> bool:
        return self.get(path, bool)

    def get_array(self, path: str) -> list[Value]:
        return self.get(path, list)

    def get_scope(self, path: str) -> Scope:
        return self.get(path, Scope)

    def walk(self, prefix: str = "") -> Iterator[tuple[str, Scope | Variable]]:
        """Yield ``(dotted_path, node)`` for every namespace and variable, depth first.

        Namespaces are listed before variables, matching resolution order.
        Objects held by variables are descended into after the variable itself.
        """
        for name, child in self.namespaces.items():
            path = f"{prefix}.{name}" if prefix else name
            yield path, child
            yield from child.walk(path)
        for name, var in self.variables.items():
            path = f"{prefix}.{name}" if prefix else name
            yield path, var
            if isinstance(var.value, ScopeValue):
                yield from var.value.scope.walk(path)


_KIND_NAMES: dict[type, str] = {
    str: "string",
    float: "number",
    bool: "bool",
    list: "array",
    Scope: "scope",
}
