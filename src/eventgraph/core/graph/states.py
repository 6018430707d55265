"""State keys used by the association graph.

States are opaque hashable identifiers. The only state the package defines
itself is the ``ANY`` wildcard, which matches every concrete state at query
time and can only be used when registering associations.
"""
from __future__ import annotations

from typing import Any, Hashable, TypeAlias

State: TypeAlias = Hashable


class _AnyState:
    """Singleton type of the ``ANY`` wildcard."""

    _instance: "_AnyState | None" = None

    def __new__(cls) -> "_AnyState":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<<any>>"

    def __reduce__(self) -> str:
        return "ANY"

    def __copy__(self) -> "_AnyState":
        return self

    def __deepcopy__(self, memo: Any) -> "_AnyState":
        return self


ANY = _AnyState()


def is_wildcard(state: Any) -> bool:
    return state is ANY


__all__ = ["ANY", "State", "is_wildcard"]
