"""
Lexical analyzer for the Mustache template engine.

Splits template source into text runs and tags. Handles delimiter changes
({{=<% %>=}}), triple-mustache tags and Mustache "standalone lines": a
section, close, comment or delimiter tag that is alone on its line removes
the whole line from the output.
"""

from __future__ import annotations

import bisect
import logging
import re
from typing import List, Optional, Tuple

from .tokens import Token, TokenType, TemplateSyntaxError, UnclosedTagError, UnknownSigilError

logger = logging.getLogger(__name__)

DEFAULT_DELIMITERS: Tuple[str, str] = ("{{", "}}")

# "." is the implicit iterator, otherwise dot-separated segments
_NAME_RE = re.compile(r"^(?:\.|[A-Za-z0-9_\-]+(?:\.[A-Za-z0-9_\-]+)*)$")

_SIGILS = {
    "#": TokenType.SECTION_OPEN,
    "^": TokenType.INVERTED_OPEN,
    "/": TokenType.SECTION_CLOSE,
    "&": TokenType.RAW_VARIABLE,
}

# Tag kinds that may occupy a line on their own; None stands for a delimiter change
_STANDALONE_KINDS = {
    TokenType.SECTION_OPEN,
    TokenType.INVERTED_OPEN,
    TokenType.SECTION_CLOSE,
    TokenType.COMMENT,
    None,
}


class TemplateLexer:
    """
    Mustache template lexer.

    A single left-to-right scan for the current opening delimiter. Text
    between tags becomes TEXT tokens, each tag becomes one tag token.
    Delimiter changes are applied immediately and produce no token.
    """

    def __init__(self, text: str, template_name: str = ""):
        self.text = text
        self.template_name = template_name
        self.position = 0
        self.length = len(text)
        self.open_tag, self.close_tag = DEFAULT_DELIMITERS

        # Offsets of line starts, used to turn positions into line:column
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole source and returns the token list ending with EOF.

        Raises:
            TemplateSyntaxError: On a malformed tag
        """
        tokens: List[Token] = []

        while self.position < self.length:
            start = self.text.find(self.open_tag, self.position)
            if start == -1:
                self._emit_text(tokens, self.position, self.length)
                self.position = self.length
                break
            if start > self.position:
                self._emit_text(tokens, self.position, start)
            self._read_tag(tokens, start)

        line, column = self._line_col(self.length)
        tokens.append(Token(TokenType.EOF, "", self.length, line, column))

        logger.debug("Tokenized %r into %d tokens", self.template_name or "<text>", len(tokens))
        return tokens

    # ---- tags ----

    def _read_tag(self, tokens: List[Token], start: int) -> None:
        content_start = start + len(self.open_tag)

        # {{{name}}}: the extra brace belongs to the closing sequence as well
        if self.text.startswith("{", content_start):
            close_seq = "}" + self.close_tag
            content_start += 1
            triple = True
        else:
            close_seq = self.close_tag
            triple = False

        end = self.text.find(close_seq, content_start)
        if end == -1:
            raise self._error(UnclosedTagError, f"Unclosed tag, expected {close_seq!r}", start)

        content = self.text[content_start:end]
        tag_end = end + len(close_seq)

        kind, value = self._classify(content, triple, start)

        if kind in _STANDALONE_KINDS and self._is_standalone(start, tag_end):
            self._trim_line_indent(tokens, start)
            self.position = self._next_line_start(tag_end)
        else:
            self.position = tag_end

        if kind is None:
            self._set_delimiters(value, start)
            return

        line, column = self._line_col(start)
        tokens.append(Token(kind, value, start, line, column))

    def _classify(self, content: str, triple: bool, start: int) -> Tuple[Optional[TokenType], str]:
        """
        Determines the tag kind from its content.

        Returns (kind, value); kind is None for a delimiter change and value is
        then the raw "<open> <close>" text.
        """
        stripped = content.strip()

        if triple:
            return TokenType.RAW_VARIABLE, self._check_name(stripped, start)

        if not stripped:
            raise self._error(TemplateSyntaxError, "Empty tag", start)

        sigil = stripped[0]

        if sigil == "!":
            return TokenType.COMMENT, stripped[1:].strip()

        if sigil == "=":
            if len(stripped) < 2 or not stripped.endswith("="):
                raise self._error(TemplateSyntaxError, "Invalid delimiter change", start)
            return None, stripped[1:-1].strip()

        if sigil == "{":
            if not stripped.endswith("}"):
                raise self._error(UnclosedTagError, "Unclosed '{' in tag", start)
            return TokenType.RAW_VARIABLE, self._check_name(stripped[1:-1].strip(), start)

        kind = _SIGILS.get(sigil)
        if kind is not None:
            return kind, self._check_name(stripped[1:].strip(), start)

        if sigil.isalnum() or sigil in "_.":
            return TokenType.VARIABLE, self._check_name(stripped, start)

        line, column = self._line_col(start)
        raise UnknownSigilError(sigil, line, column, self.template_name)

    def _check_name(self, name: str, start: int) -> str:
        if not _NAME_RE.match(name):
            raise self._error(TemplateSyntaxError, f"Invalid tag name {name!r}", start)
        return name

    def _set_delimiters(self, raw: str, start: int) -> None:
        parts = raw.split()
        if len(parts) != 2 or any("=" in p for p in parts):
            raise self._error(TemplateSyntaxError, f"Invalid delimiter change {raw!r}", start)
        self.open_tag, self.close_tag = parts
        logger.debug("Delimiters changed to %s %s", self.open_tag, self.close_tag)

    # ---- standalone lines ----

    def _is_standalone(self, start: int, tag_end: int) -> bool:
        line_start = self.text.rfind("\n", 0, start) + 1
        line_end = self._line_end(tag_end)
        left = self.text[line_start:start]
        right = self.text[tag_end:line_end]
        return left.strip(" \t") == "" and right.strip(" \t\r") == ""

    def _trim_line_indent(self, tokens: List[Token], start: int) -> None:
        """Drops the whitespace preceding a standalone tag from the last TEXT token."""
        line_start = self.text.rfind("\n", 0, start) + 1
        indent = start - line_start
        if indent == 0 or not tokens or tokens[-1].type != TokenType.TEXT:
            return
        last = tokens.pop()
        trimmed = last.value[:-indent]
        if trimmed:
            tokens.append(Token(TokenType.TEXT, trimmed, last.position, last.line, last.column))

    def _line_end(self, offset: int) -> int:
        nl = self.text.find("\n", offset)
        return self.length if nl == -1 else nl

    def _next_line_start(self, offset: int) -> int:
        nl = self.text.find("\n", offset)
        return self.length if nl == -1 else nl + 1

    # ---- helpers ----

    def _emit_text(self, tokens: List[Token], start: int, end: int) -> None:
        value = self.text[start:end]
        if not value:
            return
        # After a delimiter change two text runs may touch
        if tokens and tokens[-1].type == TokenType.TEXT:
            last = tokens.pop()
            tokens.append(Token(TokenType.TEXT, last.value + value, last.position, last.line, last.column))
            return
        line, column = self._line_col(start)
        tokens.append(Token(TokenType.TEXT, value, start, line, column))

    def _line_col(self, offset: int) -> Tuple[int, int]:
        index = bisect.bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def _error(self, cls, message: str, offset: int) -> TemplateSyntaxError:
        line, column = self._line_col(offset)
        return cls(message, line, column, self.template_name)


def tokenize_template(text: str, template_name: str = "") -> List[Token]:
    """
    Convenience function for tokenizing a template.

    Args:
        text: Template source text
        template_name: Name used in error messages

    Returns:
        List of tokens

    Raises:
        TemplateSyntaxError: On a lexical error
    """
    lexer = TemplateLexer(text, template_name)
    return lexer.tokenize()


__all__ = ["TemplateLexer", "tokenize_template", "DEFAULT_DELIMITERS"]
