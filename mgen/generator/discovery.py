"""
Discovery of (template, data, output) targets.

A template "Program.cs.mustache" produces "Program.cs" from the first
existing companion data file "Program.cs.json" / ".yaml" / ".yml".
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import pathspec

from ..config import GeneratorConfig
from ..errors import MGUserError
from ..types import GenerationTarget

logger = logging.getLogger(__name__)


def build_ignore_spec(root: Path, exclude: Sequence[str] = ()) -> Optional[pathspec.PathSpec]:
    """
    Build a PathSpec from .gitignore plus configured exclude patterns.
    Returns None when there is nothing to ignore.
    """
    lines: List[str] = []
    gitignore = root / ".gitignore"
    if gitignore.is_file():
        for ln in gitignore.read_text(encoding="utf-8", errors="ignore").splitlines():
            ln = ln.strip()
            if ln and not ln.startswith("#"):
                lines.append(ln)
    lines.extend(p for p in exclude if p.strip())
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def target_for_template(template_path: Path, cfg: GeneratorConfig) -> GenerationTarget:
    """
    Derive output and data paths from a template path.

    Without any companion data file the first data suffix is used, so that
    generation of this target fails with a readable io error.
    """
    name = template_path.name
    if not name.endswith(cfg.template_suffix) or name == cfg.template_suffix:
        raise MGUserError(f"Not a template file (expected '*{cfg.template_suffix}'): {template_path}")

    output_path = template_path.with_name(name[: -len(cfg.template_suffix)])

    candidates = [output_path.with_name(output_path.name + sfx) for sfx in cfg.data_suffixes]
    data_path = next((c for c in candidates if c.is_file()), None)
    if data_path is None:
        if not candidates:
            raise MGUserError("No data suffixes configured")
        data_path = candidates[0]

    return GenerationTarget(template_path=template_path, data_path=data_path, output_path=output_path)


def iter_templates(root: Path, cfg: GeneratorConfig) -> Iterable[Path]:
    """
    Recursive iterator over template files honouring .gitignore and exclude
    patterns. Ignored directories are pruned early.
    """
    root = root.resolve()
    spec = build_ignore_spec(root, cfg.exclude)
    for dirpath, dirnames, filenames in os.walk(root):
        # never descend into .git
        if ".git" in dirnames:
            dirnames.remove(".git")

        if spec is not None:
            keep: List[str] = []
            for d in dirnames:
                rel_dir = Path(dirpath, d).relative_to(root).as_posix()
                if not spec.match_file(rel_dir + "/"):
                    keep.append(d)
            dirnames[:] = keep
        dirnames.sort()

        for fn in sorted(filenames):
            if not fn.endswith(cfg.template_suffix) or fn == cfg.template_suffix:
                continue
            p = Path(dirpath, fn)
            if spec is not None and spec.match_file(p.relative_to(root).as_posix()):
                continue
            yield p


def discover_targets(root: Path, cfg: GeneratorConfig) -> List[GenerationTarget]:
    targets = [target_for_template(p, cfg) for p in iter_templates(root, cfg)]
    targets.sort(key=lambda t: t.template_path.as_posix())
    logger.debug("Discovered %d template(s) under %s", len(targets), root)
    return targets


def collect_targets(paths: Sequence[Path], cfg: GeneratorConfig) -> List[GenerationTarget]:
    """
    Targets for CLI/API arguments: directories are walked, template files
    are taken as is. Duplicates are dropped, order is preserved.
    """
    result: List[GenerationTarget] = []
    seen = set()
    for path in paths:
        if path.is_dir():
            found = discover_targets(path, cfg)
        elif path.is_file():
            found = [target_for_template(path.resolve(), cfg)]
        else:
            raise MGUserError(f"No such file or directory: {path}")
        for target in found:
            if target.template_path not in seen:
                seen.add(target.template_path)
                result.append(target)
    return result


__all__ = ["build_ignore_spec", "target_for_template", "iter_templates", "discover_targets", "collect_targets"]
