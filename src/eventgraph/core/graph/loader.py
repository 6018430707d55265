"""Declarative graph definitions.

Builds an EventGraph from a YAML document of the form:

    associations:
      - from: "*"
        to: closed
        values: [cleanup]
      - from: [idle, ready]
        to: running
        value: start-spinner
      - from: running
        to: "*"
        resolver: "mypkg.hooks:on_leave_running"

The wildcard token (``graph.wildcard_token``, default ``"*"``) maps to ANY.
Entries are applied in document order, so query ordering matches an
equivalent sequence of ``assoc`` calls.
"""
from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional

import jsonschema
import yaml

from ..exceptions import GraphDefinitionError
from ..utils.io import read_yaml
from .event_graph import EventGraph
from .links import Resolver, ResolverFn, Values
from .states import ANY

if TYPE_CHECKING:
    from ..config.graph import GraphConfig

logger = logging.getLogger(__name__)


def import_resolver(path: str) -> ResolverFn:
    """Import ``"package.module:attr"`` and return the attribute.

    Callability is checked later by FunctionalGraphLink.
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise GraphDefinitionError(
            f"Resolver path {path!r} must look like 'package.module:function'",
            context={"resolver": path},
        )
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise GraphDefinitionError(
            f"Cannot import resolver module {module_name!r}: {exc}",
            context={"resolver": path},
        ) from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise GraphDefinitionError(
                f"Resolver {path!r} not found: {module_name!r} has no attribute {attr_path!r}",
                context={"resolver": path},
            ) from exc
    logger.debug("Imported resolver %s", path)
    return obj


def _validate(definition: Any, source: Optional[str]) -> None:
    from eventgraph.data import read_schema

    try:
        jsonschema.validate(instance=definition, schema=read_schema("graph.schema.yaml"))
    except jsonschema.ValidationError as exc:
        path = list(exc.absolute_path)
        index = path[1] if len(path) > 1 and path[0] == "associations" else None
        where = f"association #{index}" if index is not None else "graph definition"
        raise GraphDefinitionError(
            f"Invalid {where}: {exc.message}",
            index=index if isinstance(index, int) else None,
            source=source,
        ) from exc


def _to_state(raw: Any, wildcard_token: str) -> Any:
    if isinstance(raw, list):
        return [_to_state(item, wildcard_token) for item in raw]
    return ANY if raw == wildcard_token else raw


def _to_value(entry: Mapping[str, Any]) -> Any:
    if "resolver" in entry:
        return Resolver(import_resolver(entry["resolver"]))
    if "values" in entry:
        return Values(list(entry["values"]))
    return entry["value"]


def build_graph(
    definition: Any,
    *,
    config: Optional["GraphConfig"] = None,
    graph: Optional[EventGraph] = None,
    source: Optional[str] = None,
) -> EventGraph:
    """Validate ``definition`` and register its associations.

    Args:
        definition: Parsed YAML/JSON document.
        config: Graph settings; loaded from the environment when omitted.
        graph: Existing graph to extend; a new one is created when omitted.
        source: Optional name (e.g. file path) used in error context.

    Returns:
        The populated graph.

    Raises:
        GraphDefinitionError: Schema violation or unresolvable resolver path.
        InvalidArgumentError / TypeMismatchError: Propagated from ``assoc``.
    """
    if config is None:
        from ..config.graph import GraphConfig

        config = GraphConfig()

    _validate(definition, source)
    target = graph if graph is not None else EventGraph.from_config(config)
    token = config.wildcard_token

    entries = definition["associations"]
    for index, entry in enumerate(entries):
        try:
            value = _to_value(entry)
        except GraphDefinitionError as exc:
            exc.context.setdefault("index", index)
            if source:
                exc.context.setdefault("source", source)
            raise
        target.assoc(_to_state(entry["from"], token), _to_state(entry["to"], token), value)

    logger.info(
        "Loaded %d association(s)%s",
        len(entries),
        f" from {source}" if source else "",
    )
    return target


def load_graph(
    path: Path,
    *,
    config: Optional["GraphConfig"] = None,
    graph: Optional[EventGraph] = None,
) -> EventGraph:
    """Read a YAML graph definition from ``path`` and build it."""
    path = Path(path)
    try:
        definition = read_yaml(path, default={}, raise_on_error=True)
    except FileNotFoundError as exc:
        raise GraphDefinitionError(str(exc), source=str(path)) from exc
    except yaml.YAMLError as exc:
        raise GraphDefinitionError(f"Invalid YAML in {path}: {exc}", source=str(path)) from exc
    return build_graph(definition, config=config, graph=graph, source=str(path))


__all__ = ["build_graph", "load_graph", "import_resolver"]
