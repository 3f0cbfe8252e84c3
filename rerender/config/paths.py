from __future__ import annotations

from pathlib import Path

# Single source of truth for configuration file location.
CFG_FILE = "rerender.yaml"


def cfg_path(root: Path) -> Path:
    """Path to the configuration file <root>/rerender.yaml."""
    return (root / CFG_FILE).resolve()


def templates_root(root: Path, templates: str) -> Path:
    """Absolute path to the templates directory."""
    return (root / templates).resolve()


__all__ = ["CFG_FILE", "cfg_path", "templates_root"]
