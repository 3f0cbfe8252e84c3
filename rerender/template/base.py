"""
Base interfaces for template plugins.

Defines the base class that plugins implement to contribute block tags
to a template processor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .handlers import TemplateProcessorHandlers
from .protocols import TemplateRegistryProtocol
from .types import PluginPriority, TagSpec


class TemplatePlugin(ABC):
    """
    Base interface for template plugins.

    A plugin contributes block tags through register_tags(). The tag
    behaviour itself lives in the TagSpec render functions; the plugin is
    only the unit of registration.
    """

    def __init__(self):
        """Initializes the plugin."""
        self._handlers: Optional[TemplateProcessorHandlers] = None
        self._registry: Optional[TemplateRegistryProtocol] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns plugin name."""
        pass

    @property
    def priority(self) -> PluginPriority:
        """Returns plugin priority."""
        return PluginPriority.DEFAULT

    def set_handlers(self, handlers: TemplateProcessorHandlers) -> None:
        """
        Sets the template processor handlers.

        Args:
            handlers: Internal handlers for calling processor functions
        """
        self._handlers = handlers

    @property
    def handlers(self) -> TemplateProcessorHandlers:
        """
        Returns the template processor handlers.

        Returns:
            Handlers for calling processor functions
        """
        assert self._handlers is not None, "Handlers must be set before use"
        return self._handlers

    def set_registry(self, registry: TemplateRegistryProtocol) -> None:
        """Sets the registry the plugin is registered in."""
        self._registry = registry

    @property
    def registry(self) -> TemplateRegistryProtocol:
        """Returns the registry the plugin is registered in."""
        assert self._registry is not None, "Registry must be set before use"
        return self._registry

    @abstractmethod
    def register_tags(self) -> List[TagSpec]:
        """
        Registers block tags handled by this plugin.

        Returns:
            List of tag specifications
        """
        pass

    def initialize(self) -> None:
        """
        Initializes the plugin after all plugins are registered.

        Called once handlers and registry are set. May be used to inspect
        tags registered by other plugins.
        """
        pass


PluginList = List[TemplatePlugin]

__all__ = [
    "TemplatePlugin",
    "PluginList",
]
