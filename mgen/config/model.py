from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from ..types import RunOptions

CFG_FILE = "mgen.yaml"

@dataclass(frozen=True)
class GeneratorConfig:
    template_suffix: str = ".mustache"
    # companion data files, first existing wins
    data_suffixes: List[str] = field(default_factory=lambda: [".json", ".yaml", ".yml"])
    escape: str = "html"
    strict: bool = False
    header: str = "auto"                        # auto | none
    comment_prefix: Optional[str] = None        # forces the header comment syntax
    exclude: List[str] = field(default_factory=list)   # gitignore-style patterns
    jobs: int = 1

    def with_options(self, options: RunOptions) -> "GeneratorConfig":
        """CLI/API overrides win over the file."""
        changes = {}
        if options.escape is not None:
            changes["escape"] = options.escape
        if options.strict is not None:
            changes["strict"] = options.strict
        if options.header is not None:
            changes["header"] = options.header
        if options.jobs is not None:
            changes["jobs"] = options.jobs
        return replace(self, **changes) if changes else self
