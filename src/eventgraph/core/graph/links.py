"""Graph links: one registered edge plus a strategy for producing its values.

Two concrete variants exist:

- DirectGraphLink: holds a fixed, ordered sequence of values.
- FunctionalGraphLink: holds a resolver ``(context, from_state, to_state)``
  that is called on every ``resolve`` (results are never cached).

``Values`` and ``Resolver`` are explicit tagged inputs accepted by
``EventGraph.assoc`` when the caller wants to state the value kind up front
instead of relying on runtime inspection.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple

from ..utils.assertions import (
    assert_not_null,
    is_callable,
    not_implemented_error,
)
from ..exceptions import TypeMismatchError
from .states import State

ResolverFn = Callable[[Any, State, State], Any]


@dataclass(frozen=True)
class Values:
    """Tagged input: register ``items`` as a fixed value sequence."""

    items: Sequence[Any]


@dataclass(frozen=True)
class Resolver:
    """Tagged input: register ``fn`` as a resolver."""

    fn: ResolverFn


def _as_list(result: Any) -> List[Any]:
    if isinstance(result, (list, tuple)):
        return list(result)
    return [result]


class GraphLink:
    """An edge ``from_state -> to_state`` carrying associated values.

    This is the capability contract; use one of the concrete variants.
    """

    __slots__ = ("_from_state", "_to_state")

    def __init__(self, from_state: State, to_state: State) -> None:
        assert_not_null(from_state, "from_state")
        assert_not_null(to_state, "to_state")
        self._from_state = from_state
        self._to_state = to_state

    @property
    def from_state(self) -> State:
        return self._from_state

    @property
    def to_state(self) -> State:
        return self._to_state

    def resolve(self, context: Any) -> List[Any]:
        """Return the values associated with this edge for ``context``."""
        raise not_implemented_error(
            f"{type(self).__name__}.resolve is not implemented",
            from_state=repr(self._from_state),
            to_state=repr(self._to_state),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._from_state!r} -> {self._to_state!r})"


class DirectGraphLink(GraphLink):
    """By-value association: ``resolve`` ignores the context."""

    __slots__ = ("_values",)

    def __init__(self, from_state: State, to_state: State, values: Sequence[Any]) -> None:
        super().__init__(from_state, to_state)
        assert_not_null(values, "values")
        self._values: Tuple[Any, ...] = tuple(values)

    @property
    def values(self) -> Tuple[Any, ...]:
        return self._values

    def resolve(self, context: Any) -> List[Any]:
        # Fresh list per call; the stored tuple is never handed out.
        return list(self._values)

    def __repr__(self) -> str:
        return (
            f"DirectGraphLink({self.from_state!r} -> {self.to_state!r}, "
            f"values={list(self._values)!r})"
        )


class FunctionalGraphLink(GraphLink):
    """Computed association: ``resolve`` calls the resolver every time.

    The resolver receives ``(context, from_state, to_state)``, where the
    states are this link's registered endpoints (so ``ANY`` for wildcard
    registrations). A list or tuple result is returned as a new list; any
    other result becomes a single-element list.
    """

    __slots__ = ("_resolver",)

    def __init__(self, from_state: State, to_state: State, resolver: ResolverFn) -> None:
        assert_not_null(from_state, "from_state")
        assert_not_null(to_state, "to_state")
        assert_not_null(resolver, "resolver")
        if not is_callable(resolver):
            raise TypeMismatchError(
                "resolver must be callable",
                context={"resolver_type": type(resolver).__name__},
            )
        super().__init__(from_state, to_state)
        self._resolver = resolver

    @property
    def resolver(self) -> ResolverFn:
        return self._resolver

    def resolve(self, context: Any) -> List[Any]:
        return _as_list(self._resolver(context, self.from_state, self.to_state))

    def __repr__(self) -> str:
        name = getattr(self._resolver, "__qualname__", None) or repr(self._resolver)
        return f"FunctionalGraphLink({self.from_state!r} -> {self.to_state!r}, resolver={name})"


__all__ = [
    "GraphLink",
    "DirectGraphLink",
    "FunctionalGraphLink",
    "Values",
    "Resolver",
    "ResolverFn",
]
