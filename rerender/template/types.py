from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional


class PluginPriority(enum.IntEnum):
    """Priorities defining the order in which plugins are initialized."""

    BLOCK = 100      # Block tags {% name %}...{% endname %}
    DEFAULT = 50
    LOW = 10


@dataclass(frozen=True)
class BlockCall:
    """
    A single invocation of a registered block tag.

    Built by the extension on every render and handed to the tag's
    render function. Lives only for the duration of that call.

    variables holds the call-site bindings, including the enclosing
    for-loop's ``loop``. Each render_body() call merges the assignments
    made at the top level of the body into it.
    """
    name: str                              # Tag name (e.g. "render")
    markup: str                            # Raw arguments after the tag name
    render_body: Callable[[], str]         # Renders the captured body once
    variables: Mapping[str, Any]           # Bindings visible at the call site
    template_name: Optional[str] = None    # Name of the enclosing template


@dataclass(frozen=True)
class TagSpec:
    """
    Specification of a block tag for registration in the registry.
    """
    name: str                                   # Opening tag name
    render_func: Callable[[BlockCall], str]     # Produces the tag's output

    @property
    def end_tag(self) -> str:
        """Name of the closing marker."""
        return f"end{self.name}"


TagRegistry = Dict[str, TagSpec]


__all__ = [
    "PluginPriority",
    "BlockCall",
    "TagSpec",
    "TagRegistry",
]
