"""
Template processor.

Public API that puts the Jinja2 host, the plugin registry and the tag
extension together into a single interface for rendering templates.

Functionality is extended through plugins.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Type

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError, Undefined
from jinja2.utils import LRUCache

from .base import TemplatePlugin
from .extension import PluginTagsExtension
from .handlers import TemplateProcessorHandlers
from .registry import TemplateRegistry
from ..config import EngineConfig, templates_root
from ..errors import RerenderUserError

logger = logging.getLogger(__name__)


class TemplateProcessingError(RerenderUserError):
    """General template processing error not raised by the host engine."""

    def __init__(self, message: str, template_name: str = "", cause: Optional[Exception] = None):
        super().__init__(f"Template processing error in '{template_name}': {message}")
        self.template_name = template_name
        self.cause = cause


class TemplateProcessor:
    """
    Main template processor.
    """

    def __init__(self, config: EngineConfig, registry: TemplateRegistry, root: Optional[Path] = None):
        """
        Initializes the template processor.

        Args:
            config: Engine configuration
            registry: Component registry (passed in to avoid global state)
            root: Project root; enables loading templates from <root>/<templates>
        """
        self.config = config
        self.root = root
        self.registry = registry

        self.env = self._create_environment()

        # Compiled string templates: "<name>:<hash>" -> Template
        self._template_cache = LRUCache(config.cache_size)

        class ProcessorHandlers(TemplateProcessorHandlers):
            def render_text(self, source: str, variables: Mapping[str, Any], template_name: Optional[str] = None) -> str:
                """Delegates a nested render pass to the processor."""
                return processor_self._render_source(source, variables, template_name or "")

        processor_self = self
        self.handlers = ProcessorHandlers()

    def _create_environment(self) -> Environment:
        cfg = self.config
        undefined: Type[Undefined] = StrictUndefined if cfg.strict_undefined else Undefined
        loader = None
        if self.root is not None:
            loader = FileSystemLoader(str(templates_root(self.root, cfg.templates)))

        env = Environment(
            loader=loader,
            extensions=[PluginTagsExtension],
            autoescape=cfg.autoescape,
            undefined=undefined,
            trim_blocks=cfg.trim_blocks,
            lstrip_blocks=cfg.lstrip_blocks,
            keep_trailing_newline=cfg.keep_trailing_newline,
        )
        env.extend(template_registry=self.registry)
        return env

    def process_template_file(self, template_name: str, variables: Optional[Mapping[str, Any]] = None) -> str:
        """
        Renders a template found by the loader under <root>/<templates>.

        Args:
            template_name: Template path relative to the templates directory
            variables: Render context

        Returns:
            Rendered template text

        Raises:
            TemplateProcessingError: If the processor has no project root
            jinja2.TemplateError: Errors of the host engine, unmodified
        """
        def process_file():
            if self.env.loader is None:
                raise TemplateProcessingError("No templates directory configured", template_name)
            template = self.env.get_template(template_name)
            return template.render(dict(variables or {}))

        return self._handle_template_errors(
            process_file,
            template_name,
            "Failed to process template file"
        )

    def process_template_text(
        self,
        template_text: str,
        variables: Optional[Mapping[str, Any]] = None,
        template_name: str = "",
    ) -> str:
        """
        Renders a template from text.

        Args:
            template_text: Template source
            variables: Render context
            template_name: Optional template name for diagnostics

        Returns:
            Rendered text

        Raises:
            jinja2.TemplateError: Errors of the host engine, unmodified
        """
        return self._handle_template_errors(
            lambda: self._render_source(template_text, variables or {}, template_name),
            template_name,
            "Unexpected error during processing"
        )

    # ======= Internal methods =======

    def _render_source(self, source: str, variables: Mapping[str, Any], template_name: str) -> str:
        template = self._compile(source, template_name)
        return template.render(dict(variables))

    def _compile(self, source: str, template_name: str) -> Template:
        """Compiles template source with caching."""
        cache_key = f"{template_name}:{hash(source)}"

        template = self._template_cache.get(cache_key)
        if template is None:
            template = self.env.from_string(source)
            self._template_cache[cache_key] = template
            logger.debug(f"Compiled template '{template_name or '<string>'}' ({len(source)} chars)")

        return template

    def _handle_template_errors(self, func: Callable[[], str], template_name: str, error_message: str) -> str:
        """Common error handler for template operations."""
        try:
            return func()
        except (TemplateProcessingError, TemplateError):
            # Processing and host errors pass through as is
            raise
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateProcessingError(f"{error_message}: {e}", template_name, e)


BUILTIN_PLUGINS: Dict[str, str] = {
    "render_block": "rerender.template.render_block:RenderBlockPlugin",
}


def load_plugin(ref: str) -> TemplatePlugin:
    """
    Instantiates a plugin by builtin name or "package.module:ClassName" reference.

    Raises:
        TemplateProcessingError: If the reference cannot be resolved
    """
    target = BUILTIN_PLUGINS.get(ref, ref)
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise TemplateProcessingError(
            f"Unknown plugin '{ref}'. Builtin plugins: {', '.join(sorted(BUILTIN_PLUGINS))}"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TemplateProcessingError(f"Cannot import plugin module '{module_name}': {e}", cause=e)

    plugin_cls = getattr(module, class_name, None)
    if not (isinstance(plugin_cls, type) and issubclass(plugin_cls, TemplatePlugin)):
        raise TemplateProcessingError(f"'{target}' is not a TemplatePlugin class")

    return plugin_cls()


def create_template_processor(config: Optional[EngineConfig] = None, root: Optional[Path] = None) -> TemplateProcessor:
    """
    Creates a template processor with the configured plugins installed.

    Args:
        config: Engine configuration (defaults when omitted)
        root: Project root for file-based templates

    Returns:
        Configured template processor
    """
    config = config or EngineConfig()

    # Fresh registry for this processor
    registry = TemplateRegistry()
    processor = TemplateProcessor(config, registry, root)

    for ref in config.plugins:
        registry.register_plugin(load_plugin(ref))

    # Initialize plugins after all components are registered
    registry.initialize_plugins(processor.handlers)

    return processor


__all__ = [
    "TemplateProcessor",
    "TemplateProcessingError",
    "BUILTIN_PLUGINS",
    "load_plugin",
    "create_template_processor",
]
