from __future__ import annotations

from .load import load_config
from .model import ConfigLoadError, EngineConfig, DEFAULT_PLUGINS
from .paths import CFG_FILE, cfg_path, templates_root

__all__ = [
    "load_config",
    "ConfigLoadError",
    "EngineConfig",
    "DEFAULT_PLUGINS",
    "CFG_FILE",
    "cfg_path",
    "templates_root",
]
