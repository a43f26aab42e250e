"""
Render context for the Mustache engine.

A stack of data scopes consulted innermost-first while resolving names.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional


class _Missing:
    """Marker for a name that resolves nowhere (distinct from a present null)."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def _get_member(scope: Any, key: str) -> Any:
    if isinstance(scope, dict):
        return scope.get(key, MISSING)
    if isinstance(scope, list) and key.isdigit():
        index = int(key)
        return scope[index] if index < len(scope) else MISSING
    return MISSING


class RenderContext:
    """
    Scope stack with dynamic lookup.

    The last element is the innermost scope (the current section item).
    """

    def __init__(self, *scopes: Any):
        self.scopes: List[Any] = list(scopes)

    @property
    def top(self) -> Any:
        return self.scopes[-1] if self.scopes else MISSING

    def push(self, value: Any) -> None:
        self.scopes.append(value)

    def pop(self) -> Any:
        return self.scopes.pop()

    @contextmanager
    def scope(self, value: Any) -> Iterator["RenderContext"]:
        """Pushes value for the duration of a with-block."""
        self.push(value)
        try:
            yield self
        finally:
            self.pop()

    def lookup(self, name: str) -> Any:
        """
        Resolves a tag name.

        "." is the innermost scope. For a dotted name the first segment is
        searched through the whole stack, innermost first; the remaining
        segments descend into that value only. Returns MISSING if nothing
        matches.
        """
        if name == ".":
            return self.top

        head, *rest = name.split(".")

        value = MISSING
        for scope in reversed(self.scopes):
            value = _get_member(scope, head)
            if value is not MISSING:
                break

        for key in rest:
            if value is MISSING:
                break
            value = _get_member(value, key)

        return value


__all__ = ["RenderContext", "MISSING"]
