"""Shared helpers for eventgraph."""
from __future__ import annotations

from .assertions import (
    assert_not_empty,
    assert_not_null,
    assert_true,
    is_callable,
    not_implemented_error,
)

__all__ = [
    "assert_not_null",
    "assert_not_empty",
    "assert_true",
    "is_callable",
    "not_implemented_error",
]
