"""
ddd configuration management (layered YAML + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import jsonschema
import yaml

from ddd.core.exceptions import ConfigError
from ddd.core.utils.io import iter_yaml_files, read_yaml
from ddd.core.utils.merge import deep_merge
from ddd.core.utils.paths import get_project_config_dir, resolve_project_root
from ddd.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "DDD_"

# Legacy environment variables of the shell implementation, routed through
# the config system. They are excluded from generic ``DDD_*`` parsing.
ENV_ALIASES: Dict[str, List[str]] = {
    "DDD_LOG_LEVEL": ["logging", "level"],
    "DDD_LOG_FILE": ["logging", "file"],
}

# Environment variables that configure process behaviour rather than config keys.
_ENV_RESERVED = {"DDD_PROJECT_ROOT"}


class ConfigManager:
    """Load, merge, and validate ddd configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: DDD_<section>__<key> (plus DDD_LOG_LEVEL / DDD_LOG_FILE)
    2. Project-local config: <repo>/.ddd/config.local/*.yaml (alphabetical order, uncommitted)
    3. Project config: <repo>/.ddd/config/*.yaml (alphabetical order)
    4. Bundled defaults: ddd.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else resolve_project_root()

        project_root_dir = get_project_config_dir(self.repo_root)
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = project_root_dir / "config"
        self.project_local_config_dir = project_root_dir / "config.local"
        self.schema_path = get_data_path("schemas", "config.schema.yaml")

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file must contain a mapping: {path}",
                context={"path": str(path)},
            )
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            logger.debug("Loading config layer %s", path)
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ---------- Environment overrides ----------

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
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        """Split ``policy__check_gitignore`` into ``["policy", "check_gitignore"]``.

        Only the double-underscore separator is recognised so that keys may
        contain single underscores.
        """
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in ENV_ALIASES or key in _ENV_RESERVED:
                continue
            raw = key[len(ENV_PREFIX):]
            if "__" not in raw:
                continue
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Union[Dict[str, Any], Any] = root
        for part in path[:-1]:
            if not isinstance(cur, dict):
                raise ConfigError(f"Path traverses non-dict container: {'.'.join(path)}")
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        if not isinstance(cur, dict):
            raise ConfigError(f"Key assignment requires dict: {'.'.join(path)}")
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for env_key, path in ENV_ALIASES.items():
            raw = os.environ.get(env_key)
            if raw is not None and raw.strip():
                self._set_nested(cfg, path, raw.strip())
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ---------- Loading ----------

    def validate_schema(self, cfg: Dict[str, Any]) -> None:
        schema = read_yaml(self.schema_path, default={}, raise_on_error=True)
        validator = jsonschema.Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(cfg), key=lambda e: list(e.path))
        if errors:
            first = errors[0]
            location = ".".join(str(p) for p in first.path) or "<root>"
            raise ConfigError(
                f"Invalid configuration at {location}: {first.message}",
                context={"errors": [e.message for e in errors]},
            )

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all layers.

        Args:
            validate: If True, validate against the bundled JSON schema

        Returns:
            Merged configuration dictionary
        """
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        cfg = self._load_directory(self.project_local_config_dir, cfg)
        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg


__all__ = ["ConfigManager", "ENV_ALIASES", "ENV_PREFIX"]
