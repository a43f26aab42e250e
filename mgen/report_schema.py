from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .types import GenerationStatus


class ErrorInfoModel(BaseModel):
    kind: str
    message: str
    line: Optional[int] = None
    column: Optional[int] = None


class TargetResult(BaseModel):
    template: str
    data: str
    output: str
    status: GenerationStatus
    error: Optional[ErrorInfoModel] = None


class Summary(BaseModel):
    total: int = 0
    written: int = 0
    unchanged: int = 0
    stale: int = 0
    failed: int = 0


class GenerationReport(BaseModel):
    formatVersion: int = 1
    tool_version: str
    root: str
    check: bool = False
    ok: bool
    summary: Summary
    results: List[TargetResult] = Field(default_factory=list)


class DiagConfig(BaseModel):
    path: str
    exists: bool
    values: Optional[dict] = None
    error: Optional[str] = None


class DiagEnv(BaseModel):
    python: str
    platform: str
    cwd: str


class DiagReport(BaseModel):
    protocol: int = 1
    tool_version: str
    env: DiagEnv
    config: DiagConfig
    templates: List[str] = Field(default_factory=list)
    discovery_error: Optional[str] = None


__all__ = [
    "ErrorInfoModel",
    "TargetResult",
    "Summary",
    "GenerationReport",
    "DiagConfig",
    "DiagEnv",
    "DiagReport",
]
