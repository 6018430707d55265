"""
eventgraph - transition association graph

Answers "what values are attached to this from -> to transition?" for a
state-transition consumer, with wildcard registrations and a deterministic
resolution order.
"""

from eventgraph.core.exceptions import (
    ConfigError,
    EventGraphError,
    GraphDefinitionError,
    InvalidArgumentError,
    InvalidStateError,
    LinkNotImplementedError,
    TypeMismatchError,
)
from eventgraph.core.graph import (
    ANY,
    DirectGraphLink,
    EventGraph,
    FunctionalGraphLink,
    GraphLink,
    Resolver,
    Values,
    build_graph,
    load_graph,
)

__version__ = "1.0.0"
__all__ = [
    "__version__",
    "ANY",
    "EventGraph",
    "GraphLink",
    "DirectGraphLink",
    "FunctionalGraphLink",
    "Values",
    "Resolver",
    "build_graph",
    "load_graph",
    "EventGraphError",
    "InvalidArgumentError",
    "TypeMismatchError",
    "InvalidStateError",
    "LinkNotImplementedError",
    "GraphDefinitionError",
    "ConfigError",
]
