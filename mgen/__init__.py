"""
mustache-gen: change-aware file generator driven by Mustache templates.

Public API re-exported for library hosts.
"""

from __future__ import annotations

from .engine import run_generate, run_render, list_targets
from .errors import MGUserError
from .template import parse_template, render_template, TemplateProcessor
from .types import GenerationStatus, GenerationTarget, RunOptions

__all__ = [
    "run_generate",
    "run_render",
    "list_targets",
    "MGUserError",
    "parse_template",
    "render_template",
    "TemplateProcessor",
    "GenerationStatus",
    "GenerationTarget",
    "RunOptions",
]
