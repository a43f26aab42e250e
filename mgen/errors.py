"""
User-facing error hierarchy.

The CLI prints an MGUserError as a one-line message and exits with code 2
(or records it on the failed target during generation). Anything else is a
bug and keeps its traceback.
"""

from __future__ import annotations


class MGUserError(Exception):
    """Problem the user can fix: template syntax, data, configuration, paths."""
    pass


class ConfigError(MGUserError):
    """Invalid mgen.yaml (unknown key or wrongly typed value)."""
    pass


__all__ = ["MGUserError", "ConfigError"]
