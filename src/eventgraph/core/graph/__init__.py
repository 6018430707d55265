"""
eventgraph.core.graph
=====================

Transition association graph.

Public API:

- ANY                 : wildcard state, valid only when registering.
- EventGraph          : the graph container (assoc / get_associations).
- GraphLink           : edge contract; DirectGraphLink and
                        FunctionalGraphLink are its two variants.
- Values, Resolver    : explicit tagged inputs for ``EventGraph.assoc``.
- build_graph         : build a graph from a parsed definition document.
- load_graph          : build a graph from a YAML file.
"""

from __future__ import annotations

from .states import ANY, State, is_wildcard
from .links import (
    DirectGraphLink,
    FunctionalGraphLink,
    GraphLink,
    Resolver,
    ResolverFn,
    Values,
)
from .event_graph import EventGraph
from .loader import build_graph, import_resolver, load_graph

__all__ = [
    "ANY",
    "State",
    "is_wildcard",
    "GraphLink",
    "DirectGraphLink",
    "FunctionalGraphLink",
    "Values",
    "Resolver",
    "ResolverFn",
    "EventGraph",
    "build_graph",
    "load_graph",
    "import_resolver",
]
