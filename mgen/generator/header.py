"""
Generated-file header.

The first lines of every generated file say which template it came from
and that manual edits will be lost.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

# (line prefix, line suffix)
CommentStyle = Tuple[str, str]

_SLASHES: CommentStyle = ("//", "")
_HASH: CommentStyle = ("#", "")
_DASHES: CommentStyle = ("--", "")
_MARKUP: CommentStyle = ("<!--", " -->")

_COMMENT_STYLES: Dict[str, CommentStyle] = {
    # C family
    ".c": _SLASHES, ".h": _SLASHES, ".cc": _SLASHES, ".cpp": _SLASHES, ".hpp": _SLASHES,
    ".cs": _SLASHES, ".java": _SLASHES, ".kt": _SLASHES, ".scala": _SLASHES, ".go": _SLASHES,
    ".rs": _SLASHES, ".swift": _SLASHES, ".js": _SLASHES, ".mjs": _SLASHES, ".ts": _SLASHES,
    ".tsx": _SLASHES, ".jsx": _SLASHES, ".php": _SLASHES, ".fs": _SLASHES, ".dart": _SLASHES,
    # scripting and config
    ".py": _HASH, ".sh": _HASH, ".bash": _HASH, ".rb": _HASH, ".pl": _HASH, ".r": _HASH,
    ".ps1": _HASH, ".yaml": _HASH, ".yml": _HASH, ".toml": _HASH, ".cfg": _HASH,
    ".conf": _HASH, ".ini": _HASH, ".properties": _HASH, ".txt": _HASH,
    # sql-like
    ".sql": _DASHES, ".lua": _DASHES, ".hs": _DASHES,
    # markup
    ".html": _MARKUP, ".htm": _MARKUP, ".xml": _MARKUP, ".xaml": _MARKUP, ".md": _MARKUP,
    ".csproj": _MARKUP, ".props": _MARKUP, ".targets": _MARKUP, ".svg": _MARKUP,
}

_DEFAULT_STYLE: CommentStyle = _HASH


def comment_style_for(output_path: Path, comment_prefix: Optional[str] = None) -> CommentStyle:
    if comment_prefix:
        return comment_prefix, ""
    return _COMMENT_STYLES.get(output_path.suffix.lower(), _DEFAULT_STYLE)


def detect_newline(text: str) -> str:
    """Line terminator of the first line break in text ("\\n" when there is none)."""
    nl = text.find("\n")
    if nl > 0 and text[nl - 1] == "\r":
        return "\r\n"
    return "\n"


def build_header(
    template_name: str,
    output_path: Path,
    *,
    newline: str = "\n",
    comment_prefix: Optional[str] = None,
) -> str:
    prefix, suffix = comment_style_for(output_path, comment_prefix)
    lines = [
        f"NOTE: This file has been automatically generated from {template_name}. Any changes made to",
        "  this file will be lost on the next generation.",
    ]
    body = newline.join(f"{prefix} {ln}{suffix}" for ln in lines)
    return body + newline + newline


__all__ = ["CommentStyle", "comment_style_for", "detect_newline", "build_header"]
