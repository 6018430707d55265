"""Typed accessors for the ``graph`` and ``logging`` configuration sections."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from .base import DomainConfig


class GraphConfig(DomainConfig):
    """Settings used when building graphs."""

    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(repo_root=repo_root, section="graph", overrides=overrides)

    @property
    def wildcard_token(self) -> str:
        """Token that stands for ANY in YAML graph definitions."""
        return str(self.get_value("wildcard_token", "*"))

    @property
    def reject_falsy(self) -> bool:
        return bool(self.get_value("reject_falsy", False))


class LoggingConfig(DomainConfig):
    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(repo_root=repo_root, section="logging", overrides=overrides)

    @property
    def level(self) -> str:
        return str(self.get_value("level", "INFO")).upper()

    @property
    def path(self) -> Optional[Path]:
        raw = self.get_value("path")
        if not raw:
            return None
        path = Path(str(raw)).expanduser()
        return path if path.is_absolute() else self.repo_root / path


__all__ = ["GraphConfig", "LoggingConfig"]
