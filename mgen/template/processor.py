"""
Template processor: public API of the Mustache engine.

Combines lexer, parser and renderer behind one interface and caches parsed
ASTs per processor instance.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict, Optional, Sequence

from .context import RenderContext
from .nodes import TemplateAST
from .parser import parse_template
from .renderer import TemplateRenderer

logger = logging.getLogger(__name__)


def _sha1_text(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


class TemplateProcessor:
    """
    Main template processor.

    Args:
        escape: Escaper name for {{name}} tags
        strict: Fail on unresolved variables instead of rendering ""
    """

    def __init__(self, escape: str = "html", strict: bool = False):
        self.escape = escape
        self.strict = strict
        # sha1 of the text -> AST; the name only feeds error messages
        self._template_cache: Dict[str, TemplateAST] = {}

    def parse(self, template_text: str, template_name: str = "") -> TemplateAST:
        """
        Parses template text, reusing a cached AST for identical input.

        Raises:
            TemplateSyntaxError: On a syntax error
        """
        key = _sha1_text(template_text)
        ast = self._template_cache.get(key)
        if ast is None:
            ast = parse_template(template_text, template_name)
            self._template_cache[key] = ast
            logger.debug("Parsed template %r into %d root nodes", template_name or "<text>", len(ast))
        return ast

    def render(
        self,
        ast: TemplateAST,
        data: Any,
        *,
        template_name: str = "",
        outer_scopes: Sequence[Any] = (),
    ) -> str:
        """
        Renders an AST against data.

        Args:
            ast: Parsed template
            data: Root data value (the outermost user scope)
            template_name: Name used in error messages
            outer_scopes: Scopes below data (e.g. built-in variables); data shadows them

        Raises:
            MissingVariableError: In strict mode for an unresolved variable
        """
        context = RenderContext(*outer_scopes, data)
        renderer = TemplateRenderer(escape=self.escape, strict=self.strict, template_name=template_name)
        return renderer.render(ast, context)

    def process_template_text(
        self,
        template_text: str,
        data: Any,
        template_name: str = "",
        outer_scopes: Sequence[Any] = (),
    ) -> str:
        """
        Parses and renders template text.

        Returns:
            Rendered text
        """
        ast = self.parse(template_text, template_name)
        return self.render(ast, data, template_name=template_name, outer_scopes=outer_scopes)


def render_template(
    template_text: str,
    data: Any,
    *,
    escape: str = "html",
    strict: bool = False,
    template_name: str = "",
    outer_scopes: Optional[Sequence[Any]] = None,
) -> str:
    """One-call parse + render."""
    processor = TemplateProcessor(escape=escape, strict=strict)
    return processor.process_template_text(template_text, data, template_name, outer_scopes or ())


__all__ = ["TemplateProcessor", "render_template"]
