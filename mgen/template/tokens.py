"""
Lexical types for the Mustache template engine.

Defines token kinds, the token record and the syntax error hierarchy
shared by the lexer and the parser.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from ..errors import MGUserError


class TokenType(enum.Enum):
    """Token kinds produced by the lexer."""

    # Plain text between tags
    TEXT = "TEXT"

    # Interpolation tags
    VARIABLE = "VARIABLE"                # {{name}}
    RAW_VARIABLE = "RAW_VARIABLE"        # {{{name}}} / {{&name}}

    # Section tags
    SECTION_OPEN = "SECTION_OPEN"        # {{#name}}
    INVERTED_OPEN = "INVERTED_OPEN"      # {{^name}}
    SECTION_CLOSE = "SECTION_CLOSE"      # {{/name}}

    # Comments survive lexing so that the parser sees every tag
    COMMENT = "COMMENT"                  # {{! ... }}

    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Token with position information for precise error diagnostics.

    For tags, value holds the tag name (or the comment body).
    """
    type: TokenType
    value: str
    position: int        # Offset in the source text
    line: int            # Line number (1-based)
    column: int          # Column number (1-based)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


# ---- Errors ----

class TemplateSyntaxError(MGUserError):
    """Template source cannot be parsed."""

    def __init__(self, message: str, line: int, column: int, template_name: str = ""):
        self.message = message
        self.line = line
        self.column = column
        self.template_name = template_name
        super().__init__(self._format())

    def _format(self) -> str:
        where = f"{self.template_name}:" if self.template_name else ""
        return f"{where}{self.line}:{self.column}: {self.message}"

    def with_template_name(self, template_name: str) -> "TemplateSyntaxError":
        """Attaches the template name once it is known (the lexer works on bare text)."""
        self.template_name = template_name
        self.args = (self._format(),)
        return self


class UnclosedTagError(TemplateSyntaxError):
    """An opening delimiter without its closing delimiter."""
    pass


class UnknownSigilError(TemplateSyntaxError):
    """A tag starting with a sigil the engine does not support (partials, blocks, ...)."""

    def __init__(self, sigil: str, line: int, column: int, template_name: str = ""):
        self.sigil = sigil
        super().__init__(f"Unknown tag sigil {sigil!r}", line, column, template_name)


class UnterminatedSectionError(TemplateSyntaxError):
    """A section that is still open at end of input."""

    def __init__(self, section: str, line: int, column: int, template_name: str = ""):
        self.section = section
        super().__init__(f"Unterminated section '{section}'", line, column, template_name)


class MismatchedSectionError(TemplateSyntaxError):
    """
    A closing tag that does not match the innermost open section.

    opened is None when nothing is open at all.
    """

    def __init__(self, opened: Optional[str], closed: str, line: int, column: int, template_name: str = ""):
        self.opened = opened
        self.closed = closed
        if opened is None:
            message = f"Closing tag '{closed}' has no matching open section"
        else:
            message = f"Section '{opened}' closed by mismatched tag '{closed}'"
        super().__init__(message, line, column, template_name)


__all__ = [
    "TokenType",
    "Token",
    "TemplateSyntaxError",
    "UnclosedTagError",
    "UnknownSigilError",
    "UnterminatedSectionError",
    "MismatchedSectionError",
]
