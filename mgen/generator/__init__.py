from .discovery import collect_targets, discover_targets, target_for_template
from .generator import generate, render_target, builtin_scope
from .header import build_header
from .runner import generate_all
from .writer import write_if_changed

__all__ = [
    "collect_targets",
    "discover_targets",
    "target_for_template",
    "generate",
    "render_target",
    "builtin_scope",
    "build_header",
    "generate_all",
    "write_if_changed",
]
