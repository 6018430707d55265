"""
eventgraph show command.

SUMMARY: List the transitions registered in a graph definition
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List

from eventgraph.cli import OutputFormatter, add_graph_file_arg, add_json_flag, add_repo_root_flag
from eventgraph.cli._utils import load_graph_from_args, setup_logging
from eventgraph.core.exceptions import EventGraphError
from eventgraph.core.graph import is_wildcard

SUMMARY = "List the transitions registered in a graph definition"


def _label(state: Any) -> str:
    return repr(state) if is_wildcard(state) else str(state)


def register_args(parser: argparse.ArgumentParser) -> None:
    add_graph_file_arg(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))

    try:
        setup_logging(args)
        graph = load_graph_from_args(args)
    except EventGraphError as exc:
        formatter.error(exc, error_code=type(exc).__name__)
        return 1

    transitions: List[Dict[str, Any]] = []
    for from_state, to_states in graph.transitions_map().items():
        for to_state in to_states:
            transitions.append(
                {
                    "from": _label(from_state),
                    "to": _label(to_state),
                    "links": len(graph.links(from_state, to_state)),
                }
            )

    lines = [f"{len(graph)} link(s) in {len(transitions)} transition(s)"]
    lines.extend(f"  {t['from']} -> {t['to']} ({t['links']} link(s))" for t in transitions)
    formatter.success({"links": len(graph), "transitions": transitions}, "\n".join(lines))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
