"""
Escapers applied to {{name}} interpolations.
"""

from __future__ import annotations

import html
from typing import Callable, Dict, List

Escaper = Callable[[str], str]


def _escape_html(text: str) -> str:
    return html.escape(text, quote=True)


def _escape_none(text: str) -> str:
    return text


ESCAPERS: Dict[str, Escaper] = {
    "html": _escape_html,
    "none": _escape_none,
}


def get_escaper(name: str) -> Escaper:
    try:
        return ESCAPERS[name]
    except KeyError:
        raise ValueError(f"Unknown escape mode '{name}' (expected one of: {', '.join(list_escapers())})")


def list_escapers() -> List[str]:
    return sorted(ESCAPERS)


__all__ = ["Escaper", "ESCAPERS", "get_escaper", "list_escapers"]
