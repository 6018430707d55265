"""Base class for section-specific configuration classes.

Every section config shares the same initialization pattern: create a
ConfigManager, load the merged configuration once, keep the section it
cares about.

Example:
    >>> class LoggingConfig(DomainConfig):
    ...     def __init__(self, repo_root: Optional[Path] = None):
    ...         super().__init__(repo_root=repo_root, section="logging")
"""
from __future__ import annotations

from abc import ABC
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .manager import ConfigManager


class DomainConfig(ABC):
    """Shared initialization for section configs.

    Attributes:
        repo_root: Resolved root used for configuration discovery
        _full_config: Fully merged configuration (all sections)
        _section_config: This config's section

    Args:
        repo_root: Optional root directory; auto-discovered when None.
        section: Name of the configuration section.
        overrides: Optional mapping merged over the section (highest
            precedence; handy in tests).
    """

    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        section: str,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._mgr = ConfigManager(repo_root=repo_root)
        self._full_config = self._mgr.load_config(validate=True)
        section_cfg = self._full_config.get(section, {}) or {}
        self._section_config: Dict[str, Any] = dict(section_cfg) if isinstance(section_cfg, dict) else {}
        if overrides:
            self._section_config.update(overrides)
        self.repo_root = self._mgr.repo_root

    def get_value(self, key: str, default: Any = None) -> Any:
        value = self._section_config.get(key, default)
        return default if value is None else value


__all__ = ["DomainConfig"]
