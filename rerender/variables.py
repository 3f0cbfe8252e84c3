"""
Render context assembly.

Merges data files (YAML / JSON) and KEY=VALUE bindings into the flat
mapping the templates are rendered against.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config import EngineConfig
from .errors import RerenderUserError
from .types import RunOptions

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


class DataLoadError(RerenderUserError):
    """Raised when a data file or a variable binding cannot be used."""
    pass


def load_data_file(path: Path) -> Dict[str, Any]:
    """
    Loads a YAML or JSON data file whose top level is a mapping.

    Args:
        path: Data file path

    Returns:
        Parsed mapping

    Raises:
        DataLoadError: Missing file, unsupported suffix, parse error or non-mapping
    """
    if not path.is_file():
        raise DataLoadError(f"Data file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in YAML_SUFFIXES + JSON_SUFFIXES:
        raise DataLoadError(f"Unsupported data file type '{suffix}': {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if suffix in YAML_SUFFIXES:
            data = _yaml.load(text)
        else:
            data = json.loads(text)
    except (YAMLError, json.JSONDecodeError) as e:
        raise DataLoadError(f"Failed to parse data file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DataLoadError(f"Data file {path} must contain a mapping at the top level")
    return data


def parse_vars(items: Iterable[str] | None) -> Dict[str, str]:
    """Parses KEY=VALUE strings into a dictionary."""
    result: Dict[str, str] = {}
    if not items:
        return result

    for item in items:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise DataLoadError(f"Invalid variable '{item}'. Expected 'KEY=VALUE'")
        result[key] = value

    return result


def build_variables(root: Path, config: EngineConfig, options: RunOptions) -> Dict[str, Any]:
    """
    Builds the render context for a run.

    Later sources override earlier ones at the top level:
    config data files, then --data files, then --var bindings.
    """
    paths: List[Path] = [root / p for p in config.data]
    paths.extend(Path(p) for p in options.data_files)

    variables: Dict[str, Any] = {}
    for path in paths:
        data = load_data_file(path)
        logger.debug("Loaded %d key(s) from %s", len(data), path)
        variables.update(data)

    variables.update(options.variables)
    return variables


__all__ = ["DataLoadError", "load_data_file", "parse_vars", "build_variables"]
