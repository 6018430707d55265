"""Tests for the eventgraph CLI commands."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from eventgraph.cli.main import build_parser, discover_commands, main
from helpers.io_utils import write_text


@pytest.fixture
def graph_file(isolated_project_env: Path) -> Path:
    return write_text(
        isolated_project_env / "graph.yaml",
        """
        associations:
          - from: "*"
            to: closed
            value: cleanup
          - from: open
            to: closed
            values: [save, notify]
          - from: open
            to: "*"
            resolver: "helpers.resolvers:from_context"
        """,
    )


def test_commands_are_discovered() -> None:
    commands = discover_commands()
    assert set(commands) == {"query", "show"}
    assert commands["query"]["summary"]


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: eventgraph" in capsys.readouterr().out


def test_parser_requires_states() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["query", "graph.yaml", "open"])


class TestQueryCommand:
    def test_text_output(self, graph_file: Path, capsys) -> None:
        code = main(["query", str(graph_file), "open", "closed"])
        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["cleanup", "save", "notify"]

    def test_json_output_with_context(self, graph_file: Path, capsys) -> None:
        code = main(
            [
                "query",
                str(graph_file),
                "open",
                "closed",
                "--context",
                '{"handlers": ["flush"]}',
                "--json",
            ]
        )
        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload == {
            "status": "success",
            "from": "open",
            "to": "closed",
            "associations": ["cleanup", "flush", "save", "notify"],
        }

    def test_no_associations(self, graph_file: Path, capsys) -> None:
        assert main(["query", str(graph_file), "idle", "busy"]) == 0
        assert capsys.readouterr().out.strip() == "(no associations)"

    def test_invalid_context_json(self, graph_file: Path, capsys) -> None:
        code = main(["query", str(graph_file), "open", "closed", "--context", "{nope"])
        assert code == 1
        assert "--context is not valid JSON" in capsys.readouterr().err

    def test_missing_graph_file(self, isolated_project_env: Path, capsys) -> None:
        code = main(["query", str(isolated_project_env / "nope.yaml"), "a", "b", "--json"])
        assert code == 1
        payload = json.loads(capsys.readouterr().err)
        assert payload["error"] == "GraphDefinitionError"

    def test_invalid_definition(self, isolated_project_env: Path, capsys) -> None:
        path = write_text(isolated_project_env / "bad.yaml", "associations:\n  - from: a\n")
        code = main(["query", str(path), "a", "b"])
        assert code == 1
        assert capsys.readouterr().err.startswith("Error: Invalid association #0")

    def test_failing_resolver_reports_error(self, isolated_project_env: Path, capsys) -> None:
        path = write_text(
            isolated_project_env / "greeting.yaml",
            """
            associations:
              - from: a
                to: b
                resolver: "helpers.resolvers:Hooks.greeting"
            """,
        )
        assert main(["query", str(path), "a", "b"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Resolver failed: KeyError('name')" in captured.err

        assert main(["query", str(path), "a", "b", "--json"]) == 1
        err = capsys.readouterr().err
        # Log records from loading the graph precede the JSON payload on stderr.
        payload = json.loads(err[err.index("{\n"):])
        assert payload["error"] == "resolver_error"
        assert "KeyError" in payload["message"]

    def test_repo_root_config_is_used(self, isolated_project_env: Path, tmp_path_factory, capsys) -> None:
        other_root = tmp_path_factory.mktemp("other")
        write_text(other_root / ".eventgraph" / "config" / "graph.yml", 'graph:\n  wildcard_token: "ANY"\n')
        path = write_text(
            isolated_project_env / "custom.yaml",
            """
            associations:
              - from: ANY
                to: b
                value: wild
            """,
        )
        assert main(["query", str(path), "a", "b", "--repo-root", str(other_root)]) == 0
        assert capsys.readouterr().out.strip() == "wild"


class TestShowCommand:
    def test_text_output(self, graph_file: Path, capsys) -> None:
        assert main(["show", str(graph_file)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "3 link(s) in 3 transition(s)",
            "  <<any>> -> closed (1 link(s))",
            "  open -> closed (1 link(s))",
            "  open -> <<any>> (1 link(s))",
        ]

    def test_json_output(self, graph_file: Path, capsys) -> None:
        assert main(["show", str(graph_file), "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["status"] == "success"
        assert payload["links"] == 3
        assert payload["transitions"][0] == {"from": "<<any>>", "to": "closed", "links": 1}
