"""
eventgraph data resource helpers.

Provides access to bundled configuration defaults and schemas using
importlib.resources.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Args:
        subpackage: Name of the data subpackage (e.g., "config", "schemas")
        filename: Optional filename within the subpackage

    Returns:
        Absolute path to the file or directory

    Example:
        >>> get_data_path("config", "defaults.yaml")
        PosixPath('/path/to/eventgraph/data/config/defaults.yaml')
    """
    pkg = resources.files("eventgraph.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_schema(filename: str) -> dict[str, Any]:
    """Load a bundled schema from ``data/schemas``."""
    path = get_data_path("schemas", filename)
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


__all__ = ["get_data_path", "read_schema"]
