"""
eventgraph query command.

SUMMARY: Resolve the associations attached to a FROM -> TO transition
"""

from __future__ import annotations

import argparse
import json
import sys

from eventgraph.cli import OutputFormatter, add_graph_file_arg, add_json_flag, add_repo_root_flag
from eventgraph.cli._utils import load_graph_from_args, setup_logging
from eventgraph.core.exceptions import EventGraphError

SUMMARY = "Resolve the associations attached to a FROM -> TO transition"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_graph_file_arg(parser)
    parser.add_argument("from_state", help="Current state")
    parser.add_argument("to_state", help="Target state")
    parser.add_argument(
        "--context",
        type=str,
        default=None,
        help="JSON object passed to resolvers as the context",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))

    context = {}
    if args.context:
        try:
            context = json.loads(args.context)
        except ValueError as exc:
            formatter.error(exc, f"--context is not valid JSON: {exc}", error_code="invalid_context")
            return 1

    try:
        setup_logging(args)
        graph = load_graph_from_args(args)
        associations = graph.get_associations(context, args.from_state, args.to_state)
    except EventGraphError as exc:
        formatter.error(exc, error_code=type(exc).__name__)
        return 1
    except Exception as exc:
        # Resolver failures surface here with the resolver's own exception type.
        formatter.error(exc, f"Resolver failed: {exc!r}", error_code="resolver_error")
        return 1

    text = "\n".join(str(a) for a in associations) if associations else "(no associations)"
    formatter.success(
        {
            "from": args.from_state,
            "to": args.to_state,
            "associations": associations,
        },
        text,
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
