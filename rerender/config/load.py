from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import ConfigLoadError, EngineConfig
from .paths import cfg_path

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def load_config(root: Path) -> EngineConfig:
    """
    Load engine configuration from <root>/rerender.yaml.

    A missing file yields the defaults; an empty file too.

    Args:
        root: Project root path

    Returns:
        Parsed configuration

    Raises:
        ConfigLoadError: If the file is not valid YAML or has invalid keys
    """
    path = cfg_path(root)
    if not path.is_file():
        logger.debug("No config at %s, using defaults", path)
        return EngineConfig()

    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigLoadError(f"{path.name}: invalid YAML: {e}")

    if raw is None:
        return EngineConfig()
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"{path.name}: top level must be a mapping")

    try:
        return EngineConfig.from_dict(raw)
    except ConfigLoadError as e:
        raise ConfigLoadError(f"{path.name}: {e}")


__all__ = ["load_config"]
