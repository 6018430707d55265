"""Common argument helpers for CLI commands."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Directory holding .eventgraph/config (default: auto-detect)",
    )


def add_graph_file_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "graph_file",
        help="YAML graph definition file",
    )


__all__ = ["add_json_flag", "add_repo_root_flag", "add_graph_file_arg"]
