"""
Change-aware atomic writes.

A file is rewritten only when its bytes differ, so unchanged outputs keep
their timestamps and do not trigger downstream rebuilds.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def read_text_exact(path: Path) -> str:
    """Reads UTF-8 text keeping line terminators as they are (no newline translation)."""
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        return f.read()


def read_existing(path: Path) -> Optional[bytes]:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """
    Write via a temporary sibling and replace, so readers see either the old
    or the new complete content.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    # hidden and unique per call; "x" mode never opens an existing file
    tmp = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    f = tmp.open("xb")
    try:
        with f:
            f.write(data)
        tmp.replace(path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def needs_write(path: Path, content: str) -> bool:
    return read_existing(path) != content.encode("utf-8")


def write_if_changed(path: Path, content: str) -> bool:
    """
    Returns:
        True if the file was written, False if it already had this content
    """
    if not needs_write(path, content):
        logger.debug("Unchanged: %s", path)
        return False
    write_bytes_atomic(path, content.encode("utf-8"))
    logger.info("Written: %s", path)
    return True


__all__ = ["read_text_exact", "read_existing", "write_bytes_atomic", "needs_write", "write_if_changed"]
