"""
rerender: a double-render block tag for Jinja2.

The ``{% render %}...{% endrender %}`` tag renders its body once, then parses
the result as a new template and renders it again against the same context.
"""

from __future__ import annotations

from .errors import RerenderUserError
from .template import (
    TemplateProcessor,
    TemplateProcessingError,
    TemplateRegistry,
    create_template_processor,
)
from .version import tool_version

__all__ = [
    "RerenderUserError",
    "TemplateProcessor",
    "TemplateProcessingError",
    "TemplateRegistry",
    "create_template_processor",
    "tool_version",
]
