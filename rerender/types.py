from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class RunOptions:
    """Options of a single render run, as collected by the CLI."""
    data_files: List[str] = field(default_factory=list)
    variables: Dict[str, str] = field(default_factory=dict)
    check_json: bool = False
