"""Configuration loading for eventgraph."""
from __future__ import annotations

from .manager import ConfigManager
from .base import DomainConfig
from .graph import GraphConfig, LoggingConfig

__all__ = ["ConfigManager", "DomainConfig", "GraphConfig", "LoggingConfig"]
