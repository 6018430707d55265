"""Association graph keyed by state transitions.

Usage:
    from eventgraph import ANY, EventGraph

    graph = (
        EventGraph()
        .assoc(ANY, "closed", "cleanup")
        .assoc(["idle", "ready"], "running", ["spinner", "timer"])
        .assoc("running", ANY, lambda ctx, f, t: ctx["on_leave"])
    )
    graph.get_associations({"on_leave": "flush"}, "running", "closed")
    # -> ["cleanup", "flush"]
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from ..exceptions import InvalidArgumentError, TypeMismatchError
from ..utils.assertions import (
    assert_not_empty,
    assert_not_null,
    assert_true,
    is_callable,
)
from .links import DirectGraphLink, FunctionalGraphLink, GraphLink, Resolver, Values
from .states import ANY, State, is_wildcard

if TYPE_CHECKING:
    from ..config.graph import GraphConfig

logger = logging.getLogger(__name__)

_FANOUT_TYPES = (list, tuple)


def _assert_hashable(state: Any, name: str) -> None:
    try:
        hash(state)
    except TypeError as exc:
        raise TypeMismatchError(
            f"{name} must be hashable (got {type(state).__name__})",
            context={"argument": name, "state_type": type(state).__name__},
        ) from exc


class EventGraph:
    """Map of associations from one state to another.

    Structure:
      - ``_from_map[from_state][to_state]`` is the list of links registered for
        that exact pair, in registration order.
      - Inner maps and link lists are created lazily and never removed.

    Query order for ``get_associations(ctx, f, t)``:
      1. (ANY, ANY)
      2. (ANY, t)
      3. (f, ANY)
      4. (f, t)
    """

    ANY = ANY

    __slots__ = ("_from_map", "_frozen", "_reject_falsy", "_num_links")

    def __init__(self, *, reject_falsy: bool = False) -> None:
        """
        Parameters
        ----------
        reject_falsy:
            When True, ``assoc`` also rejects falsy scalars (``0``, ``False``,
            ``""``) for states and values. By default only ``None`` is
            rejected.
        """
        self._from_map: Dict[State, Dict[State, List[GraphLink]]] = {}
        self._frozen = False
        self._reject_falsy = bool(reject_falsy)
        self._num_links = 0

    @classmethod
    def from_config(cls, config: Optional["GraphConfig"] = None) -> "EventGraph":
        """Create an empty graph using the ``graph`` configuration section."""
        if config is None:
            from ..config.graph import GraphConfig

            config = GraphConfig()
        return cls(reject_falsy=config.reject_falsy)

    # ------------------------------------------------------------------ #
    # Build phase
    # ------------------------------------------------------------------ #

    def assoc(self, from_state: Any, to_state: Any, value: Any) -> "EventGraph":
        """Associate ``value`` with the transition ``from_state -> to_state``.

        ``from_state`` and ``to_state`` may each be a single state, ``ANY`` or
        a list/tuple of states (fan-out; both lists give the cross product).

        ``value`` dispatch:
          - ``Resolver(fn)`` or any callable: computed on every query.
          - ``Values(seq)`` or a list/tuple: stored as the value sequence.
          - anything else: stored as a one-element sequence.

        Returns:
            self, for chaining.

        Raises:
            InvalidArgumentError: If a state or the value is missing.
            TypeMismatchError: If ``Resolver`` wraps a non-callable or a
                state is unhashable.
            InvalidStateError: If the graph has been frozen.
        """
        check = assert_not_empty if self._reject_falsy else assert_not_null
        check(from_state, "from_state")
        check(to_state, "to_state")
        check(value, "value")
        assert_true(not self._frozen, "EventGraph is frozen; no further associations can be added")

        # Build every link first so a bad fan-out element leaves the graph untouched.
        links = list(self._build_links(from_state, to_state, value, check))
        for link in links:
            self._add_link(link)
        return self

    def freeze(self) -> "EventGraph":
        """End the build phase; later ``assoc`` calls raise InvalidStateError."""
        if not self._frozen:
            self._frozen = True
            logger.info("EventGraph frozen with %d link(s)", self._num_links)
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _build_links(self, from_state: Any, to_state: Any, value: Any, check) -> Iterator[GraphLink]:
        if isinstance(from_state, _FANOUT_TYPES):
            for f in from_state:
                check(f, "from_state")
                yield from self._build_links(f, to_state, value, check)
        elif isinstance(to_state, _FANOUT_TYPES):
            for t in to_state:
                check(t, "to_state")
                yield from self._build_links(from_state, t, value, check)
        else:
            _assert_hashable(from_state, "from_state")
            _assert_hashable(to_state, "to_state")
            yield self._make_link(from_state, to_state, value)

    @staticmethod
    def _make_link(from_state: State, to_state: State, value: Any) -> GraphLink:
        if isinstance(value, Resolver):
            return FunctionalGraphLink(from_state, to_state, value.fn)
        if isinstance(value, Values):
            return DirectGraphLink(from_state, to_state, value.items)
        if is_callable(value):
            return FunctionalGraphLink(from_state, to_state, value)
        if isinstance(value, (list, tuple)):
            return DirectGraphLink(from_state, to_state, value)
        return DirectGraphLink(from_state, to_state, [value])

    def _add_link(self, link: GraphLink) -> None:
        to_map = self._from_map.setdefault(link.from_state, {})
        to_map.setdefault(link.to_state, []).append(link)
        self._num_links += 1
        logger.debug("Registered %r", link)

    # ------------------------------------------------------------------ #
    # Query phase
    # ------------------------------------------------------------------ #

    def get_associations(self, context: Any, from_state: State, to_state: State) -> List[Any]:
        """Resolve every association for ``from_state -> to_state``.

        Resolver links are called with ``context`` on every call. Exceptions
        raised by resolvers propagate unchanged.

        Raises:
            InvalidArgumentError: If a state is None or the ``ANY`` wildcard.
        """
        assert_not_null(from_state, "from_state")
        assert_not_null(to_state, "to_state")
        for name, state in (("from_state", from_state), ("to_state", to_state)):
            if is_wildcard(state):
                raise InvalidArgumentError(
                    f"{name} must be a concrete state; ANY is only valid when registering",
                    argument=name,
                )

        associations: List[Any] = []
        for link in list(self._matching_links(from_state, to_state)):
            associations.extend(link.resolve(context))

        logger.debug(
            "Resolved %d association(s) for %r -> %r",
            len(associations),
            from_state,
            to_state,
        )
        return associations

    def _matching_links(self, from_state: State, to_state: State) -> Iterator[GraphLink]:
        for f in (ANY, from_state):
            to_map = self._from_map.get(f)
            if not to_map:
                continue
            for t in (ANY, to_state):
                yield from to_map.get(t, ())

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    def links(self, from_state: State, to_state: State) -> List[GraphLink]:
        """Return the links registered for exactly this pair (no wildcard expansion)."""
        return list(self._from_map.get(from_state, {}).get(to_state, ()))

    def transitions_map(self) -> Dict[State, List[State]]:
        """Return a from -> [to, ...] adjacency map in registration order."""
        return {f: list(to_map.keys()) for f, to_map in self._from_map.items()}

    def __len__(self) -> int:
        return self._num_links

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        from_state, to_state = pair
        try:
            return to_state in self._from_map.get(from_state, {})
        except TypeError:
            return False

    def __repr__(self) -> str:
        pairs = sum(len(to_map) for to_map in self._from_map.values())
        return (
            f"EventGraph(links={self._num_links}, transitions={pairs}, "
            f"frozen={self._frozen})"
        )


__all__ = ["EventGraph", "ANY"]
