from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .config import GeneratorConfig, load_config
from .data import load_data_file
from .generator import builtin_scope, collect_targets, generate_all
from .generator.writer import read_text_exact
from .report_schema import ErrorInfoModel, GenerationReport, Summary, TargetResult
from .template import TemplateProcessor
from .types import GenerationOutcome, GenerationStatus, GenerationTarget, RunOptions
from .version import tool_version


# ----------------------------- RunContext ----------------------------- #

@dataclass(frozen=True)
class RunContext:
    root: Path
    config: GeneratorConfig
    options: RunOptions


def _build_run_ctx(options: RunOptions, root: Optional[Path] = None) -> RunContext:
    root = (root or Path.cwd()).resolve()
    cfg = load_config(root).with_options(options)
    return RunContext(root=root, config=cfg, options=options)


# ----------------------------- helpers ----------------------------- #

def rel_posix(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _result_row(outcome: GenerationOutcome, root: Path) -> TargetResult:
    err = outcome.error
    return TargetResult(
        template=rel_posix(outcome.target.template_path, root),
        data=rel_posix(outcome.target.data_path, root),
        output=rel_posix(outcome.target.output_path, root),
        status=outcome.status,
        error=ErrorInfoModel(kind=err.kind, message=err.message, line=err.line, column=err.column) if err else None,
    )


def _summary(outcomes: Sequence[GenerationOutcome]) -> Summary:
    def count(status: GenerationStatus) -> int:
        return sum(1 for o in outcomes if o.status is status)

    return Summary(
        total=len(outcomes),
        written=count(GenerationStatus.WRITTEN),
        unchanged=count(GenerationStatus.UNCHANGED),
        stale=count(GenerationStatus.STALE),
        failed=count(GenerationStatus.FAILED),
    )


def _targets(run_ctx: RunContext, paths: Sequence[Path]) -> List[GenerationTarget]:
    # relative arguments are taken from the project root
    resolved = [p if p.is_absolute() else run_ctx.root / p for p in paths]
    return collect_targets(resolved or [run_ctx.root], run_ctx.config)


# ----------------------------- public API ----------------------------- #

def list_targets(
    paths: Sequence[Path] = (),
    options: RunOptions = RunOptions(),
    *,
    root: Optional[Path] = None,
) -> List[GenerationTarget]:
    """Discovers targets without generating anything."""
    run_ctx = _build_run_ctx(options, root)
    return _targets(run_ctx, paths)


def run_generate(
    paths: Sequence[Path] = (),
    options: RunOptions = RunOptions(),
    *,
    root: Optional[Path] = None,
) -> GenerationReport:
    """
    Main entry for CLI and library hosts:
      • loads mgen.yaml from root (cwd by default) and applies options
      • discovers targets under paths (root when empty)
      • generates them, isolating failures per target
      • returns the aggregate pydantic report
    """
    run_ctx = _build_run_ctx(options, root)
    targets = _targets(run_ctx, paths)
    outcomes = generate_all(targets, run_ctx.config, check=options.check)

    summary = _summary(outcomes)
    ok = summary.failed == 0 and (not options.check or summary.stale == 0)
    return GenerationReport(
        tool_version=tool_version(),
        root=str(run_ctx.root),
        check=options.check,
        ok=ok,
        summary=summary,
        results=[_result_row(o, run_ctx.root) for o in outcomes],
    )


def run_render(
    template_path: Path,
    data_path: Optional[Path] = None,
    options: RunOptions = RunOptions(),
    *,
    root: Optional[Path] = None,
) -> str:
    """
    Renders one template to text: no header, nothing is written.

    Without data_path the companion data file of the template is used.

    Raises:
        MGUserError subclasses and OSError; nothing is caught here
    """
    run_ctx = _build_run_ctx(options, root)
    cfg = run_ctx.config
    template_path = template_path if template_path.is_absolute() else run_ctx.root / template_path
    if data_path is not None and not data_path.is_absolute():
        data_path = run_ctx.root / data_path

    if data_path is None:
        target = collect_targets([template_path], cfg)[0]
    else:
        output_path = template_path.with_name(template_path.name[: -len(cfg.template_suffix)]) \
            if template_path.name.endswith(cfg.template_suffix) else template_path
        target = GenerationTarget(template_path=template_path, data_path=data_path, output_path=output_path)

    data = load_data_file(target.data_path)
    template_text = read_text_exact(target.template_path)
    processor = TemplateProcessor(escape=cfg.escape, strict=cfg.strict)
    return processor.process_template_text(
        template_text,
        data,
        template_name=target.template_path.as_posix(),
        outer_scopes=[builtin_scope(target)],
    )


__all__ = ["run_generate", "run_render", "list_targets", "rel_posix", "RunContext"]
