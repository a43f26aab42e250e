"""
Mustache template engine.

Lexer → parser → AST → renderer, plus the processor facade.
"""

from __future__ import annotations

from .context import RenderContext, MISSING
from .nodes import TemplateNode, TextNode, VariableNode, SectionNode, TemplateAST
from .parser import TemplateParser, parse_template
from .processor import TemplateProcessor, render_template
from .renderer import TemplateRenderer, MissingVariableError
from .tokens import (
    TemplateSyntaxError,
    UnclosedTagError,
    UnknownSigilError,
    UnterminatedSectionError,
    MismatchedSectionError,
)

__all__ = [
    "RenderContext",
    "MISSING",
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "SectionNode",
    "TemplateAST",
    "TemplateParser",
    "parse_template",
    "TemplateProcessor",
    "render_template",
    "TemplateRenderer",
    "MissingVariableError",
    "TemplateSyntaxError",
    "UnclosedTagError",
    "UnknownSigilError",
    "UnterminatedSectionError",
    "MismatchedSectionError",
]
