"""
Plugin-based template layer on top of Jinja2.

Block tags are contributed by plugins registered in a per-processor
TemplateRegistry; the Jinja2 environment does the parsing and rendering.
"""

from __future__ import annotations

from .base import TemplatePlugin
from .processor import TemplateProcessor, TemplateProcessingError, create_template_processor
from .registry import TemplateRegistry
from .types import BlockCall, PluginPriority, TagSpec

__all__ = [
    "TemplatePlugin",
    "TemplateProcessor",
    "TemplateProcessingError",
    "TemplateRegistry",
    "create_template_processor",
    "BlockCall",
    "PluginPriority",
    "TagSpec",
]
