"""
Plugin for the ``render`` block tag.

The body of the block is rendered once against the current context; the
resulting text is parsed as a new template and rendered again against the
same context. Typical use is building JSON inline, where expressions have
to appear inside what would otherwise be literal data:

    {% render %}{"title": "{{ '{{ page.title }}' }}"}{% endrender %}
"""

from __future__ import annotations

import logging
from typing import List

from ..base import TemplatePlugin
from ..types import BlockCall, PluginPriority, TagSpec

logger = logging.getLogger(__name__)

RENDER_TAG = "render"


class RenderBlockPlugin(TemplatePlugin):
    """
    Plugin registering the ``render`` tag.

    Errors of the second parse (for example, an unbalanced delimiter produced
    by the first pass) are the host's TemplateSyntaxError and propagate as is.
    """

    @property
    def name(self) -> str:
        """Returns plugin name."""
        return "render_block"

    @property
    def priority(self) -> PluginPriority:
        """Returns plugin priority."""
        return PluginPriority.BLOCK

    def register_tags(self) -> List[TagSpec]:
        """Registers the render tag."""
        return [TagSpec(name=RENDER_TAG, render_func=self.render)]

    def render(self, call: BlockCall) -> str:
        """
        Renders the captured body twice.

        Args:
            call: Tag invocation with the captured body and call-site variables

        Returns:
            Result of the second render pass
        """
        if call.markup:
            logger.debug("Ignoring arguments of '%s' tag: %s", call.name, call.markup)

        intermediate = call.render_body()
        logger.debug(
            "First pass of '%s' in '%s' produced %d chars",
            call.name, call.template_name or "<string>", len(intermediate),
        )
        return self.handlers.render_text(intermediate, call.variables, call.template_name)
