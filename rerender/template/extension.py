"""
Jinja2 extension dispatching registered block tags.

A single extension serves every tag in the environment's template registry:
it captures the body between ``{% name ... %}`` and ``{% endname %}`` and,
at render time, hands a BlockCall to the tag's render function.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Set

from jinja2 import nodes
from jinja2.ext import Extension
from jinja2.parser import Parser
from jinja2.runtime import Context, Undefined
from markupsafe import Markup

from .types import BlockCall

logger = logging.getLogger(__name__)

# Caller parameter receiving the locals of the block body
BODY_LOCALS = "_rerender_body_locals"


class PluginTagsExtension(Extension):
    """
    Bridges the template registry and the Jinja2 parser.

    The registry is looked up on the environment (``template_registry``),
    so the set of tags follows whatever the owning processor registered.
    """

    @property  # type: ignore[override]
    def tags(self) -> Set[str]:
        registry = getattr(self.environment, "template_registry", None)
        if registry is None:
            return set()
        return set(registry.tags)

    def parse(self, parser: Parser) -> nodes.Node:
        token = next(parser.stream)
        spec = self.environment.template_registry.tags[token.value]

        markup = self._read_markup(parser)
        body = parser.parse_statements((f"name:{spec.end_tag}",), drop_needle=True)

        # Last statement of the body hands its locals ({% set %} inside the block) back to the call
        body.append(nodes.ExprStmt(self.call_method(
            "_collect",
            [nodes.Name(BODY_LOCALS, "load"), nodes.DerivedContextReference()],
        )))

        # Referencing "loop" makes an enclosing for-loop create its LoopContext
        call = self.call_method(
            "_invoke",
            [
                nodes.DerivedContextReference(),
                nodes.Name("loop", "load"),
                nodes.Const(spec.name),
                nodes.Const(markup),
            ],
        )
        return nodes.CallBlock(call, [nodes.Name(BODY_LOCALS, "param")], [], body).set_lineno(token.lineno)

    @staticmethod
    def _read_markup(parser: Parser) -> str:
        """Consumes the arguments of the opening tag and returns them as text."""
        parts: List[str] = []
        while not parser.stream.current.test_any("block_end", "eof"):
            tok = next(parser.stream)
            parts.append(repr(tok.value) if tok.type == "string" else str(tok.value))
        return " ".join(parts)

    @staticmethod
    def _collect(target: Dict[str, Any], context: Context) -> None:
        target.update(context.get_all())
        target.pop(BODY_LOCALS, None)

    def _invoke(self, context: Context, loop: Any, tag_name: str, markup: str, caller: Callable[..., str]) -> Any:
        spec = self.environment.template_registry.tags[tag_name]

        variables: Dict[str, Any] = dict(context.get_all())
        if not isinstance(loop, Undefined):
            variables["loop"] = loop

        def render_body() -> str:
            body_locals: Dict[str, Any] = {}
            rv = caller(body_locals)
            variables.update(body_locals)
            return rv

        call = BlockCall(
            name=tag_name,
            markup=markup,
            render_body=render_body,
            variables=variables,
            template_name=context.name,
        )
        rv = spec.render_func(call)
        if context.eval_ctx.autoescape:
            return Markup(rv)
        return rv


__all__ = ["PluginTagsExtension"]
