"""
Template parser for the Mustache engine.

Turns the token sequence into an AST, pairing section open/close tags.
"""

from __future__ import annotations

from typing import List, Optional

from .lexer import TemplateLexer
from .nodes import TemplateAST, TemplateNode, TextNode, VariableNode, SectionNode
from .tokens import (
    Token,
    TokenType,
    TemplateSyntaxError,
    MismatchedSectionError,
    UnterminatedSectionError,
)


class TemplateParser:
    """
    Recursive parser for Mustache templates.

    Each open section is parsed by a nested call which returns on the
    matching close tag, so the Python call stack is the section stack.
    """

    def __init__(self, tokens: List[Token], template_name: str = ""):
        self.tokens = tokens
        self.template_name = template_name
        self.position = 0

    def parse(self) -> TemplateAST:
        """
        Parses the whole token sequence into an AST.

        Returns:
            List of root AST nodes

        Raises:
            UnterminatedSectionError: A section is still open at end of input
            MismatchedSectionError: A close tag does not match the innermost section
        """
        return self._parse_block(None)

    def _parse_block(self, opener: Optional[Token]) -> List[TemplateNode]:
        nodes: List[TemplateNode] = []

        while True:
            token = self._current()

            if token.type == TokenType.EOF:
                if opener is not None:
                    raise UnterminatedSectionError(
                        opener.value, opener.line, opener.column, self.template_name
                    )
                return nodes

            self.position += 1

            if token.type == TokenType.TEXT:
                self._append_text(nodes, token.value)
            elif token.type in (TokenType.VARIABLE, TokenType.RAW_VARIABLE):
                nodes.append(VariableNode(
                    name=token.value,
                    escape=token.type == TokenType.VARIABLE,
                    line=token.line,
                    column=token.column,
                ))
            elif token.type == TokenType.COMMENT:
                continue
            elif token.type in (TokenType.SECTION_OPEN, TokenType.INVERTED_OPEN):
                children = self._parse_block(token)
                nodes.append(SectionNode(
                    name=token.value,
                    negated=token.type == TokenType.INVERTED_OPEN,
                    children=tuple(children),
                    line=token.line,
                    column=token.column,
                ))
            elif token.type == TokenType.SECTION_CLOSE:
                if opener is None or opener.value != token.value:
                    raise MismatchedSectionError(
                        opener.value if opener is not None else None,
                        token.value,
                        token.line,
                        token.column,
                        self.template_name,
                    )
                return nodes

    def _current(self) -> Token:
        if self.position >= len(self.tokens):
            # Tolerate token lists without a trailing EOF
            return Token(TokenType.EOF, "", self.position, 0, 0)
        return self.tokens[self.position]

    @staticmethod
    def _append_text(nodes: List[TemplateNode], text: str) -> None:
        # Comments between two text runs leave them adjacent
        if nodes and isinstance(nodes[-1], TextNode):
            nodes[-1] = TextNode(nodes[-1].text + text)
        else:
            nodes.append(TextNode(text))


def parse_template(text: str, template_name: str = "") -> TemplateAST:
    """
    Lexes and parses template source in one call.

    Args:
        text: Template source text
        template_name: Name used in error messages

    Returns:
        Template AST (empty list for an empty template)

    Raises:
        TemplateSyntaxError: On any syntax error
    """
    tokens = TemplateLexer(text, template_name).tokenize()
    try:
        return TemplateParser(tokens, template_name).parse()
    except RecursionError:
        raise TemplateSyntaxError("Sections are nested too deeply", 1, 1, template_name) from None


__all__ = ["TemplateParser", "parse_template"]
