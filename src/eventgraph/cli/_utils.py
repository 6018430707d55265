"""Shared helpers for CLI commands."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from eventgraph.core.config import GraphConfig, LoggingConfig
from eventgraph.core.graph import EventGraph, load_graph
from eventgraph.core.log import configure_stdlib_logging


def get_repo_root(args: argparse.Namespace) -> Optional[Path]:
    raw = getattr(args, "repo_root", None)
    return Path(raw) if raw else None


def setup_logging(args: argparse.Namespace) -> None:
    cfg = LoggingConfig(repo_root=get_repo_root(args))
    configure_stdlib_logging(level=cfg.level, log_path=cfg.path)


def load_graph_from_args(args: argparse.Namespace) -> EventGraph:
    config = GraphConfig(repo_root=get_repo_root(args))
    return load_graph(Path(args.graph_file), config=config).freeze()


__all__ = ["get_repo_root", "setup_logging", "load_graph_from_args"]
