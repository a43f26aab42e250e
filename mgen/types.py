from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

# ---- Aliases for clarity ----
EscapeName = Literal["html", "none"]
HeaderMode = Literal["auto", "none"]
ErrorKind = Literal["template-syntax", "data", "render", "io"]


# -----------------------------
@dataclass(frozen=True)
class RunOptions:
    """
    Per-invocation overrides on top of mgen.yaml.

    None means "take the value from the configuration file".
    """
    escape: Optional[EscapeName] = None
    strict: Optional[bool] = None
    header: Optional[HeaderMode] = None
    jobs: Optional[int] = None
    # report stale outputs instead of writing them
    check: bool = False


# ---- Targets ----

@dataclass(frozen=True)
class GenerationTarget:
    """
    One (template, data, output) triple.

    Discovered at every invocation and never persisted.
    """
    template_path: Path
    data_path: Path
    output_path: Path

    def label(self) -> str:
        return self.template_path.as_posix()


class GenerationStatus(str, enum.Enum):
    UNCHANGED = "unchanged"
    WRITTEN = "written"
    STALE = "stale"      # check mode: would be written
    FAILED = "failed"


@dataclass(frozen=True)
class ErrorInfo:
    kind: ErrorKind
    message: str
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass(frozen=True)
class GenerationOutcome:
    target: GenerationTarget
    status: GenerationStatus
    error: Optional[ErrorInfo] = None

    @property
    def ok(self) -> bool:
        return self.status is not GenerationStatus.FAILED


__all__ = [
    "EscapeName",
    "HeaderMode",
    "ErrorKind",
    "RunOptions",
    "GenerationTarget",
    "GenerationStatus",
    "ErrorInfo",
    "GenerationOutcome",
]
