"""
CLI entry point for eventgraph.

Sub-commands are discovered from the ``commands`` package: adding a command
means adding a module there.
"""

from __future__ import annotations

import argparse
import importlib
import pkgutil
import sys
from functools import lru_cache
from typing import Any

from eventgraph import __version__


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Import every public module under ``eventgraph.cli.commands``."""
    from eventgraph.cli import commands as commands_pkg

    commands: dict[str, dict[str, Any]] = {}
    for info in sorted(pkgutil.iter_modules(commands_pkg.__path__), key=lambda i: i.name):
        if info.name.startswith("_"):
            continue
        module = importlib.import_module(f"eventgraph.cli.commands.{info.name}")
        commands[info.name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", info.name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventgraph",
        description="Inspect and query transition association graphs",
    )
    parser.add_argument("--version", action="version", version=f"eventgraph {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    for name, cmd in discover_commands().items():
        sub = subparsers.add_parser(name, help=cmd["summary"], description=cmd["summary"])
        if cmd["register_args"] is not None:
            cmd["register_args"](sub)
        sub.set_defaults(_main=cmd["main"])
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    return int(args._main(args))


if __name__ == "__main__":
    sys.exit(main())
