"""
AST renderer for the Mustache engine.

Walks a parsed template against a RenderContext and produces text.
Rendering is pure: the renderer keeps no state between render() calls.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List

from .context import MISSING, RenderContext
from .escaping import get_escaper
from .nodes import TemplateAST, TemplateNode, TextNode, VariableNode, SectionNode
from ..errors import MGUserError

logger = logging.getLogger(__name__)


class MissingVariableError(MGUserError):
    """Unresolved variable in strict mode."""

    def __init__(self, name: str, line: int, column: int, template_name: str = ""):
        where = f"{template_name}:" if template_name else ""
        super().__init__(f"{where}{line}:{column}: Unresolved variable '{name}'")
        self.name = name
        self.line = line
        self.column = column
        self.template_name = template_name


def display_value(value: Any) -> str:
    """
    Text form of a data value inside {{...}}.

    Strings as is, null/missing as "", everything else (bool, numbers,
    lists, maps) as JSON.
    """
    if value is None or value is MISSING:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def is_falsy(value: Any) -> bool:
    """
    Section truth test: only missing, null, false and the empty list are falsy.

    0, "" and {} count as present values, so {{#v}} renders them once and
    {{^v}} renders nothing.
    """
    if value is MISSING or value is None or value is False:
        return True
    return isinstance(value, list) and not value


class TemplateRenderer:
    """
    Renders a template AST.

    Args:
        escape: Escaper name for {{name}} tags ("html" or "none")
        strict: Raise MissingVariableError on unresolved variables
        template_name: Name used in error messages
    """

    def __init__(self, escape: str = "html", strict: bool = False, template_name: str = ""):
        self.escape_name = escape
        self.escaper = get_escaper(escape)
        self.strict = strict
        self.template_name = template_name

    def render(self, ast: TemplateAST, context: RenderContext) -> str:
        out: List[str] = []
        self._render_nodes(ast, context, out)
        return "".join(out)

    def _render_nodes(self, nodes, context: RenderContext, out: List[str]) -> None:
        for node in nodes:
            self._render_node(node, context, out)

    def _render_node(self, node: TemplateNode, context: RenderContext, out: List[str]) -> None:
        if isinstance(node, TextNode):
            out.append(node.text)
        elif isinstance(node, VariableNode):
            out.append(self._render_variable(node, context))
        elif isinstance(node, SectionNode):
            if node.negated:
                self._render_negated(node, context, out)
            else:
                self._render_section(node, context, out)
        else:
            raise TypeError(f"Unsupported template node: {type(node).__name__}")

    def _render_variable(self, node: VariableNode, context: RenderContext) -> str:
        value = context.lookup(node.name)
        if value is MISSING:
            if self.strict:
                raise MissingVariableError(node.name, node.line, node.column, self.template_name)
            logger.debug("Unresolved variable '%s' at %d:%d rendered empty", node.name, node.line, node.column)
            return ""
        text = display_value(value)
        return self.escaper(text) if node.escape else text

    def _render_section(self, node: SectionNode, context: RenderContext, out: List[str]) -> None:
        value = context.lookup(node.name)
        if is_falsy(value):
            return

        if isinstance(value, list):
            for item in value:
                with context.scope(item):
                    self._render_nodes(node.children, context, out)
        elif isinstance(value, dict):
            with context.scope(value):
                self._render_nodes(node.children, context, out)
        else:
            # Truthy scalar: rendered once in the unchanged context
            self._render_nodes(node.children, context, out)

    def _render_negated(self, node: SectionNode, context: RenderContext, out: List[str]) -> None:
        value = context.lookup(node.name)
        if is_falsy(value):
            self._render_nodes(node.children, context, out)


__all__ = ["TemplateRenderer", "MissingVariableError", "display_value", "is_falsy"]
