"""
Central registry of template plugins.

Each template processor owns its own registry: there is no process-wide
tag table. Plugins are registered explicitly and then initialized in
priority order.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .base import TemplatePlugin, PluginList
from .handlers import TemplateProcessorHandlers
from .protocols import TemplateRegistryProtocol
from .types import TagSpec, TagRegistry

logger = logging.getLogger(__name__)


class TemplateRegistry(TemplateRegistryProtocol):
    """
    Registry of plugins and the block tags they contribute.

    Attached to a jinja2.Environment as ``template_registry`` so that
    the tag extension can dispatch to registered render functions.
    """

    def __init__(self):
        """Initializes an empty registry."""
        self.tags: TagRegistry = {}
        self.plugins: PluginList = []
        self._plugins_initialized = False

    def register_plugin(self, plugin: TemplatePlugin) -> None:
        """
        Registers a plugin and all of its tags.

        Args:
            plugin: Plugin to register

        Raises:
            ValueError: If a plugin with the same name is already registered
        """
        if any(p.name == plugin.name for p in self.plugins):
            raise ValueError(f"Plugin '{plugin.name}' already registered")

        self.plugins.append(plugin)
        self._register_plugin_tags(plugin)
        logger.debug("Registered plugin '%s'", plugin.name)

    def _register_plugin_tags(self, plugin: TemplatePlugin) -> None:
        """Registers tags of the plugin."""
        for tag_spec in plugin.register_tags():
            if tag_spec.name in self.tags:
                logger.warning(
                    f"Tag '{tag_spec.name}' from plugin '{plugin.name}' "
                    f"overwrites existing tag"
                )
            self.tags[tag_spec.name] = tag_spec

    def initialize_plugins(self, handlers: TemplateProcessorHandlers) -> None:
        """
        Initializes all registered plugins.

        Args:
            handlers: Processor handlers passed to the plugins

        Called after all plugins are registered. Repeated calls are no-ops.
        """
        if self._plugins_initialized:
            return

        sorted_plugins = sorted(self.plugins, key=lambda p: p.priority, reverse=True)

        for plugin in sorted_plugins:
            plugin.set_registry(self)
            plugin.set_handlers(handlers)

        for plugin in sorted_plugins:
            plugin.initialize()

        self._plugins_initialized = True

    def get_tag(self, name: str) -> Optional[TagSpec]:
        """Returns the tag registered under name, or None."""
        return self.tags.get(name)

    def list_tags(self) -> List[str]:
        """Returns the names of all registered tags, sorted."""
        return sorted(self.tags)

    def list_plugins(self) -> List[str]:
        """Returns plugin names in registration order."""
        return [p.name for p in self.plugins]


__all__ = ["TemplateRegistry"]
