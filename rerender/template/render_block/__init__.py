"""
Plugin providing the double-render block tag.

Handles:
- {% render %}...{% endrender %} - renders the body, then renders the result again
"""

from __future__ import annotations

from .plugin import RenderBlockPlugin, RENDER_TAG

__all__ = ["RenderBlockPlugin", "RENDER_TAG"]
