from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_PACKAGE_LOGGER = "eventgraph"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED_TARGET: str | None = None
_EVENTGRAPH_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, level: str = "INFO", log_path: Optional[Path] = None) -> None:
    """Attach a single handler to the ``eventgraph`` logger.

    Writes to ``log_path`` when given, otherwise to stderr. Idempotent
    per-process: calling again with the same target only updates the level.
    """
    global _CONFIGURED_TARGET, _EVENTGRAPH_HANDLER

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    pkg_logger = logging.getLogger(_PACKAGE_LOGGER)
    pkg_logger.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _EVENTGRAPH_HANDLER is not None:
        _EVENTGRAPH_HANDLER.setLevel(_level_from_name(level))
        return

    # Replace the handler we installed previously when switching targets.
    if _EVENTGRAPH_HANDLER is not None:
        pkg_logger.removeHandler(_EVENTGRAPH_HANDLER)
        _EVENTGRAPH_HANDLER.close()
        _EVENTGRAPH_HANDLER = None

    handler: logging.Handler
    if log_path:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(_FORMAT))
    pkg_logger.addHandler(handler)

    _EVENTGRAPH_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by configure_stdlib_logging."""
    global _CONFIGURED_TARGET, _EVENTGRAPH_HANDLER
    pkg_logger = logging.getLogger(_PACKAGE_LOGGER)
    if _EVENTGRAPH_HANDLER is not None:
        pkg_logger.removeHandler(_EVENTGRAPH_HANDLER)
        _EVENTGRAPH_HANDLER.close()
    pkg_logger.setLevel(logging.NOTSET)
    _CONFIGURED_TARGET = None
    _EVENTGRAPH_HANDLER = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
