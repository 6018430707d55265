"""Tests for building graphs from YAML definitions."""
from __future__ import annotations

from pathlib import Path

import pytest

from eventgraph import ANY, EventGraph
from eventgraph.core.config import GraphConfig
from eventgraph.core.exceptions import (
    GraphDefinitionError,
    InvalidArgumentError,
    TypeMismatchError,
)
from eventgraph.core.graph import build_graph, import_resolver, load_graph
from helpers.io_utils import write_config, write_text
from helpers.resolvers import echo_transition


@pytest.fixture
def config(isolated_project_env: Path) -> GraphConfig:
    return GraphConfig(repo_root=isolated_project_env)


class TestLoadGraph:
    def test_loads_all_value_kinds(self, isolated_project_env: Path, config: GraphConfig) -> None:
        path = write_text(
            isolated_project_env / "graph.yaml",
            """
            associations:
              - from: "*"
                to: closed
                values: [cleanup, log]
              - from: [idle, ready]
                to: running
                value: start-spinner
              - from: running
                to: "*"
                resolver: "helpers.resolvers:echo_transition"
            """,
        )
        graph = load_graph(path, config=config)

        assert graph.get_associations(None, "idle", "running") == ["start-spinner"]
        assert graph.get_associations(None, "ready", "running") == ["start-spinner"]
        assert graph.get_associations(None, "running", "closed") == [
            "cleanup",
            "log",
            f"running->{ANY!r}",
        ]
        assert (ANY, "closed") in graph
        assert ("running", ANY) in graph

    def test_document_order_is_registration_order(self, config: GraphConfig) -> None:
        definition = {
            "associations": [
                {"from": "s", "to": "t", "value": "second-bucket-1"},
                {"from": "*", "to": "*", "value": "first"},
                {"from": "s", "to": "t", "values": ["second-bucket-2", "second-bucket-3"]},
            ]
        }
        graph = build_graph(definition, config=config)
        assert graph.get_associations(None, "s", "t") == [
            "first",
            "second-bucket-1",
            "second-bucket-2",
            "second-bucket-3",
        ]

    def test_extends_existing_graph(self, config: GraphConfig) -> None:
        graph = EventGraph().assoc("s", "t", "programmatic")
        result = build_graph(
            {"associations": [{"from": "s", "to": "t", "value": "declared"}]},
            config=config,
            graph=graph,
        )
        assert result is graph
        assert graph.get_associations(None, "s", "t") == ["programmatic", "declared"]

    def test_resolver_uses_context(self, config: GraphConfig) -> None:
        graph = build_graph(
            {"associations": [{"from": "a", "to": "b", "resolver": "helpers.resolvers:from_context"}]},
            config=config,
        )
        assert graph.get_associations({"handlers": ["h1", "h2"]}, "a", "b") == ["h1", "h2"]
        assert graph.get_associations({}, "a", "b") == []

    def test_nested_resolver_attribute(self, config: GraphConfig) -> None:
        graph = build_graph(
            {"associations": [{"from": "a", "to": "b", "resolver": "helpers.resolvers:Hooks.greeting"}]},
            config=config,
        )
        assert graph.get_associations({"name": "ada"}, "a", "b") == ["hello ada"]

    def test_custom_wildcard_token(self, isolated_project_env: Path) -> None:
        write_config(
            isolated_project_env,
            """
            graph:
              wildcard_token: "<<any>>"
            """,
        )
        config = GraphConfig(repo_root=isolated_project_env)
        graph = build_graph(
            {"associations": [{"from": "<<any>>", "to": "*", "value": "v"}]},
            config=config,
        )
        assert (ANY, "*") in graph
        assert graph.get_associations(None, "s", "*") == ["v"]

    def test_reject_falsy_from_config(self, isolated_project_env: Path) -> None:
        config = GraphConfig(repo_root=isolated_project_env, overrides={"reject_falsy": True})
        with pytest.raises(InvalidArgumentError):
            build_graph({"associations": [{"from": "a", "to": "b", "value": 0}]}, config=config)

    def test_null_value_is_rejected(self, config: GraphConfig) -> None:
        with pytest.raises(InvalidArgumentError):
            build_graph({"associations": [{"from": "a", "to": "b", "value": None}]}, config=config)


class TestDefinitionErrors:
    def test_missing_file(self, isolated_project_env: Path, config: GraphConfig) -> None:
        with pytest.raises(GraphDefinitionError) as excinfo:
            load_graph(isolated_project_env / "missing.yaml", config=config)
        assert excinfo.value.context["source"].endswith("missing.yaml")

    def test_invalid_yaml(self, isolated_project_env: Path, config: GraphConfig) -> None:
        path = write_text(isolated_project_env / "broken.yaml", "associations: [unclosed\n")
        with pytest.raises(GraphDefinitionError):
            load_graph(path, config=config)

    def test_missing_associations_key(self, config: GraphConfig) -> None:
        with pytest.raises(GraphDefinitionError):
            build_graph({}, config=config)

    def test_entry_without_value_reports_index(self, config: GraphConfig) -> None:
        definition = {
            "associations": [
                {"from": "a", "to": "b", "value": 1},
                {"from": "a", "to": "b"},
            ]
        }
        with pytest.raises(GraphDefinitionError) as excinfo:
            build_graph(definition, config=config)
        assert excinfo.value.context["index"] == 1

    def test_entry_with_two_value_kinds(self, config: GraphConfig) -> None:
        definition = {"associations": [{"from": "a", "to": "b", "value": 1, "values": [2]}]}
        with pytest.raises(GraphDefinitionError):
            build_graph(definition, config=config)

    def test_unknown_key(self, config: GraphConfig) -> None:
        definition = {"associations": [{"from": "a", "to": "b", "value": 1, "extra": True}]}
        with pytest.raises(GraphDefinitionError):
            build_graph(definition, config=config)

    def test_unimportable_resolver_reports_index(self, config: GraphConfig) -> None:
        definition = {
            "associations": [
                {"from": "a", "to": "b", "resolver": "no_such_module_xyz:fn"},
            ]
        }
        with pytest.raises(GraphDefinitionError) as excinfo:
            build_graph(definition, config=config, source="inline")
        assert excinfo.value.context["index"] == 0
        assert excinfo.value.context["source"] == "inline"

    def test_failed_entry_keeps_earlier_entries_only(self, config: GraphConfig) -> None:
        graph = EventGraph()
        definition = {
            "associations": [
                {"from": "a", "to": "b", "value": 1},
                {"from": "a", "to": "b", "resolver": "helpers.resolvers:missing_fn"},
            ]
        }
        with pytest.raises(GraphDefinitionError):
            build_graph(definition, config=config, graph=graph)
        assert graph.get_associations(None, "a", "b") == [1]

    def test_non_callable_resolver(self, config: GraphConfig) -> None:
        definition = {"associations": [{"from": "a", "to": "b", "resolver": "helpers.resolvers:NOT_CALLABLE"}]}
        with pytest.raises(TypeMismatchError):
            build_graph(definition, config=config)

    def test_error_payload(self, config: GraphConfig) -> None:
        with pytest.raises(GraphDefinitionError) as excinfo:
            build_graph({"associations": [{"from": "a"}]}, config=config)
        payload = excinfo.value.to_json_error()
        assert payload["code"] == "GraphDefinitionError"
        assert payload["context"]["index"] == 0


class TestImportResolver:
    def test_imports_function(self) -> None:
        assert import_resolver("helpers.resolvers:echo_transition") is echo_transition

    @pytest.mark.parametrize("path", ["helpers.resolvers", ":fn", "helpers.resolvers:"])
    def test_malformed_path(self, path: str) -> None:
        with pytest.raises(GraphDefinitionError):
            import_resolver(path)

    def test_missing_attribute(self) -> None:
        with pytest.raises(GraphDefinitionError, match="no attribute"):
            import_resolver("helpers.resolvers:does_not_exist")
