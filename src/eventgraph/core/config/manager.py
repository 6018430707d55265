"""
eventgraph configuration management (YAML only).

Precedence (in increasing order):
  1) Bundled defaults (``eventgraph/data/config/*.yaml``)
  2) Project overlays (``<repo_root>/.eventgraph/config/*.yml|*.yaml``)
  3) Environment overrides (``EVENTGRAPH_<SECTION>__<KEY>``)

Environment overrides:
- Path separator: double underscore ``__`` (e.g. ``EVENTGRAPH_GRAPH__REJECT_FALSY=true``).
  Variables without a separator are ignored.
- Case handling: case-insensitive lookup against existing keys; new keys are
  created lowercase.
- Type coercion: bool/null/int/float/JSON-like strings are coerced.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import jsonschema
import yaml

from ..exceptions import ConfigError
from ..utils.io import iter_yaml_files, read_yaml
from ..utils.merge import deep_merge

logger = logging.getLogger(__name__)

ENV_PREFIX = "EVENTGRAPH_"
PROJECT_DIR_NAME = ".eventgraph"


class ConfigManager:
    """Load, merge, and validate eventgraph configuration.

    Typical usage:

    ```python
    from eventgraph.core.config import ConfigManager
    mgr = ConfigManager()
    cfg = mgr.load_config(validate=True)
    ```

    Attributes:
        repo_root: Root used to resolve the project overlay directory.
        core_config_dir: Bundled defaults directory.
        project_config_dir: ``<repo_root>/.eventgraph/config``.
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        """Create a manager rooted at ``repo_root``.

        Args:
            repo_root: Optional root directory. If ``None``, the root is
                discovered by walking up from the current directory until a
                ``.eventgraph`` or ``.git`` directory is found; otherwise the
                current working directory is used.
        """
        from eventgraph.data import get_data_path

        self.repo_root = Path(repo_root).resolve() if repo_root else self._find_repo_root()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / PROJECT_DIR_NAME / "config"

    @staticmethod
    def _find_repo_root() -> Path:
        cwd = Path.cwd().resolve()
        for candidate in (cwd, *cwd.parents):
            if (candidate / PROJECT_DIR_NAME).is_dir() or (candidate / ".git").exists():
                return candidate
        return cwd

    # ---------------------------------------------------------------- #
    # Layers
    # ---------------------------------------------------------------- #

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            try:
                module_cfg = read_yaml(path, default={}, raise_on_error=True)
            except yaml.YAMLError as exc:
                # Fail closed: configuration must never silently ignore invalid YAML.
                raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
            if not isinstance(module_cfg, dict):
                raise ConfigError(
                    f"Config file {path} must contain a mapping",
                    context={"path": str(path)},
                )
            cfg = deep_merge(cfg, module_cfg)
        return cfg

    # ---------------------------------------------------------------- #
    # Environment overrides
    # ---------------------------------------------------------------- #

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        if value.strip().lower() in {"null", "none"}:
            return None
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if "__" not in raw:
                continue
            segs = raw.split("__")
            if any(seg == "" for seg in segs):
                raise ConfigError(
                    f"Malformed {ENV_PREFIX}* key: empty segment in '{key}'",
                    context={"key": key},
                )
            yield [seg.lower() for seg in segs], self._coerce_type(os.environ[key])

    @staticmethod
    def _set_nested(root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key_to_use = key_candidates.get(part, part)
            nxt = cur.get(key_to_use)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[key_to_use] = nxt
            cur = nxt
        leaf_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[leaf_candidates.get(path[-1], path[-1])] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Config override from environment: %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    # ---------------------------------------------------------------- #
    # Public API
    # ---------------------------------------------------------------- #

    def validate_schema(self, config: Dict[str, Any]) -> None:
        from eventgraph.data import read_schema

        try:
            jsonschema.validate(instance=config, schema=read_schema("config.schema.yaml"))
        except jsonschema.ValidationError as exc:
            path = ".".join(str(p) for p in exc.absolute_path)
            raise ConfigError(
                f"Invalid configuration at '{path}': {exc.message}",
                context={"path": path},
            ) from exc

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all layers.

        Args:
            validate: If True, validate the merged result against the bundled
                ``config.schema.yaml``.

        Returns:
            Merged configuration dictionary

        Raises:
            ConfigError: On invalid YAML, malformed environment keys or a
                schema violation.
        """
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Read one dotted key (``"graph.reject_falsy"``) from the merged config."""
        current: Any = self.load_config(validate=False)
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_DIR_NAME"]
