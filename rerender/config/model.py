"""
Engine configuration model.

Mirrors the keys of rerender.yaml; every key is optional.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

from ..errors import RerenderUserError


class ConfigLoadError(RerenderUserError):
    """Invalid configuration file, with the offending key in the message."""
    pass


DEFAULT_PLUGINS = ["render_block"]


@dataclass
class EngineConfig:
    templates: str = "templates"
    data: List[str] = field(default_factory=list)
    plugins: List[str] = field(default_factory=lambda: list(DEFAULT_PLUGINS))
    autoescape: bool = False
    strict_undefined: bool = False
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True
    cache_size: int = 400

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EngineConfig:
        """Create EngineConfig from YAML dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigLoadError(f"unknown config key(s): {', '.join(map(str, unknown))}")

        cfg = cls()
        for key, val in data.items():
            default = getattr(cfg, key)
            if isinstance(default, bool):
                if not isinstance(val, bool):
                    raise ConfigLoadError(f"{key}: expected bool, got {val!r}")
            elif isinstance(default, int):
                if isinstance(val, bool) or not isinstance(val, int) or val < 1:
                    raise ConfigLoadError(f"{key}: expected positive int, got {val!r}")
            elif isinstance(default, str):
                if not isinstance(val, str) or not val:
                    raise ConfigLoadError(f"{key}: expected non-empty string, got {val!r}")
            elif isinstance(default, list):
                if not isinstance(val, list) or not all(isinstance(v, str) for v in val):
                    raise ConfigLoadError(f"{key}: expected list of strings, got {val!r}")
                val = list(val)
            setattr(cfg, key, val)
        return cfg

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for YAML/JSON."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


__all__ = ["EngineConfig", "ConfigLoadError", "DEFAULT_PLUGINS"]
