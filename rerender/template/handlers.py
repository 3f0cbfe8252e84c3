"""
Core handlers exposed to template plugins.

Lets plugins call back into the processor without holding a reference to it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class TemplateProcessorHandlers(ABC):
    """Functions of the template processor available to plugins."""

    @abstractmethod
    def render_text(
        self,
        source: str,
        variables: Mapping[str, Any],
        template_name: Optional[str] = None,
    ) -> str:
        """
        Parses template source and renders it against the given variables.

        Args:
            source: Template source text
            variables: Bindings for the render pass
            template_name: Name of the template the source originates from

        Returns:
            Rendered text

        Raises:
            jinja2.TemplateError: Errors of the host engine, unmodified
        """
        ...


__all__ = ["TemplateProcessorHandlers"]
