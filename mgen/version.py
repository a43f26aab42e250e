from __future__ import annotations

from importlib import metadata

_DIST_NAME = "mustache-gen"


def tool_version() -> str:
    """Installed distribution version; "0.0.0" when running from a source tree."""
    try:
        return metadata.version(_DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
