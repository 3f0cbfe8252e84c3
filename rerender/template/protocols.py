"""
Protocols for the plugin-based template layer.

Defines the registry interface plugins may use during initialization.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from .types import TagSpec


@runtime_checkable
class TemplateRegistryProtocol(Protocol):
    """
    Registry protocol for use inside plugins.

    Lets a plugin inspect which tags are registered by other plugins.
    """

    def get_tag(self, name: str) -> Optional[TagSpec]:
        """Returns the tag registered under name, or None."""
        ...

    def list_tags(self) -> List[str]:
        """Returns the names of all registered tags, sorted."""
        ...


__all__ = ["TemplateRegistryProtocol"]
