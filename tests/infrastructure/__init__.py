"""
Shared test infrastructure: file helpers, CLI runner and sample plugins.
"""

from .cli_utils import run_cli, jload
from .file_utils import write

__all__ = ["run_cli", "jload", "write"]
