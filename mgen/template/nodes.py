"""
Template AST nodes.

An immutable hierarchy describing a parsed template. The tree never refers
to the data it will be rendered with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Plain text content.

    Emitted into the result as is.
    """
    text: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """
    Interpolation {{name}} / {{{name}}} / {{&name}}.

    escape is False for the raw forms.
    """
    name: str
    escape: bool = True
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


@dataclass(frozen=True)
class SectionNode(TemplateNode):
    """
    Section {{#name}}...{{/name}} or negated section {{^name}}...{{/name}}.
    """
    name: str
    negated: bool = False
    children: Tuple[TemplateNode, ...] = ()
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


# Alias for a node list (AST)
TemplateAST = List[TemplateNode]


__all__ = ["TemplateNode", "TextNode", "VariableNode", "SectionNode", "TemplateAST"]
