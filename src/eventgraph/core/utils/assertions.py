"""Argument and state assertion helpers.

Small primitives shared by the graph and link classes so that every
precondition failure surfaces as the same exception type with the same
message shape.
"""
from __future__ import annotations

from typing import Any

from ..exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    LinkNotImplementedError,
)


def assert_not_null(value: Any, name: str) -> None:
    """Raise InvalidArgumentError naming ``name`` when ``value`` is None."""
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None", argument=name)


def assert_not_empty(value: Any, name: str) -> None:
    """Stricter variant of assert_not_null that also rejects falsy scalars.

    Empty lists and tuples still pass; only None, 0, False, "" and other
    falsy scalars are rejected.
    """
    if not value and not isinstance(value, (list, tuple)):
        raise InvalidArgumentError(f"{name} must not be empty (got {value!r})", argument=name)


def assert_true(condition: Any, message: str) -> None:
    """Raise InvalidStateError with ``message`` when ``condition`` is falsy."""
    if not condition:
        raise InvalidStateError(message)


def is_callable(value: Any) -> bool:
    return callable(value)


def not_implemented_error(message: str = "Not implemented", **context: Any) -> LinkNotImplementedError:
    """Build (not raise) the error used by abstract contracts."""
    return LinkNotImplementedError(message, context=context or None)


__all__ = [
    "assert_not_null",
    "assert_not_empty",
    "assert_true",
    "is_callable",
    "not_implemented_error",
]
