"""Configuration for the traversal engine and its entry points."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError


@dataclass(slots=True)
class EngineConfig:
    """Runtime knobs for graph building and traversal.

    Attributes
    ----------
    workspace_root:
        Directory node ids are relative to. Used for impact analysis to check
        whether an unknown file still exists on disk.
    node_cap:
        Maximum node count for the aggregated (rendering) graph.
    focus_depth:
        Default hop count for focus-mode views.
    max_fanout:
        Neighbours considered per node in focus mode.
    context_depth:
        Default hop count for context discovery.
    context_result_cap:
        Maximum number of ranked files returned by context discovery.
    focus_warn_ms:
        Focus traversals slower than this log a warning. Advisory only.
    log_level:
        Level handed to :func:`depwalk.log.setup_logging` by entry points.
    """

    workspace_root: Path | None = None
    node_cap: int = 300
    focus_depth: int = 1
    max_fanout: int = 100
    context_depth: int = 1
    context_result_cap: int = 30
    focus_warn_ms: float = 50.0
    log_level: str = "WARNING"

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        """Return a copy with the non-``None`` overrides applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


_INT_FIELDS = {"node_cap", "focus_depth", "max_fanout", "context_depth", "context_result_cap"}


def _coerce(name: str, value: Any) -> Any:
    if name == "workspace_root":
        if value is None:
            return None
        if not isinstance(value, str):
            raise ConfigError(f"'workspace_root' must be a path string, got {value!r}")
        return Path(value).expanduser()
    if name in _INT_FIELDS:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"'{name}' must be a non-negative integer, got {value!r}")
        return value
    if name == "focus_warn_ms":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"'focus_warn_ms' must be a number, got {value!r}")
        return float(value)
    if name == "log_level":
        if not isinstance(value, str):
            raise ConfigError(f"'log_level' must be a string, got {value!r}")
        return value.upper()
    return value


def config_from_mapping(data: Dict[str, Any]) -> EngineConfig:
    """Build an :class:`EngineConfig` from a plain mapping.

    Keys use the attribute names of :class:`EngineConfig`; unknown keys are
    rejected so typos do not go unnoticed.
    """
    known = {f.name for f in fields(EngineConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
    values = {name: _coerce(name, value) for name, value in data.items()}
    return EngineConfig(**values)


def load_config(path: Path | None = None) -> EngineConfig:
    """Load configuration from a YAML file.

    Parameters
    ----------
    path:
        YAML file holding a mapping of settings. ``None`` or a path that does
        not exist yields the defaults.
    """
    if path is None or not path.exists():
        return EngineConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc

    if data is None:
        return EngineConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of settings")
    return config_from_mapping(data)


DEFAULT_CONFIG = EngineConfig()
