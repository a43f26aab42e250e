"""
Change-aware generation of one target.

load data → parse template → render with built-ins → prepend header →
compare with the existing output → atomic write only on change.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from .header import build_header, detect_newline
from .writer import needs_write, read_text_exact, write_bytes_atomic
from ..config import GeneratorConfig
from ..data import DataLoadError, load_data_file
from ..template import MissingVariableError, TemplateProcessor, TemplateSyntaxError
from ..types import ErrorInfo, ErrorKind, GenerationOutcome, GenerationStatus, GenerationTarget

logger = logging.getLogger(__name__)


def builtin_scope(target: GenerationTarget) -> Dict[str, str]:
    """Variables every template can use; user data with the same names wins."""
    return {
        "TemplateFile": target.template_path.name,
        "DataFile": target.data_path.name,
        "OutputFile": target.output_path.name,
    }


def render_target(
    target: GenerationTarget,
    cfg: GeneratorConfig,
    processor: Optional[TemplateProcessor] = None,
) -> str:
    """
    Produces the full candidate content of the output file.

    Raises:
        TemplateSyntaxError, DataLoadError, MissingVariableError, OSError
    """
    processor = processor or TemplateProcessor(escape=cfg.escape, strict=cfg.strict)
    template_name = target.template_path.as_posix()

    data = load_data_file(target.data_path)
    template_text = read_text_exact(target.template_path)
    rendered = processor.process_template_text(
        template_text,
        data,
        template_name=template_name,
        outer_scopes=[builtin_scope(target)],
    )

    if cfg.header == "none":
        return rendered

    header = build_header(
        target.template_path.name,
        target.output_path,
        newline=detect_newline(template_text),
        comment_prefix=cfg.comment_prefix,
    )
    return header + rendered


def _failed(target: GenerationTarget, kind: ErrorKind, exc: Exception) -> GenerationOutcome:
    logger.warning("Failed: %s (%s: %s)", target.label(), kind, exc)
    return GenerationOutcome(
        target=target,
        status=GenerationStatus.FAILED,
        error=ErrorInfo(
            kind=kind,
            message=str(exc),
            line=getattr(exc, "line", None),
            column=getattr(exc, "column", None),
        ),
    )


def generate(
    target: GenerationTarget,
    cfg: GeneratorConfig,
    *,
    check: bool = False,
    processor: Optional[TemplateProcessor] = None,
) -> GenerationOutcome:
    """
    Generates one target.

    Never raises for user-level problems: template, data, render and file
    system errors become a FAILED outcome and the output file is left as it was.

    Args:
        target: (template, data, output) triple
        cfg: Effective configuration
        check: Report STALE instead of writing
        processor: Shared processor (reuses parsed templates across calls)

    Returns:
        UNCHANGED, WRITTEN, STALE or FAILED outcome
    """
    try:
        candidate = render_target(target, cfg, processor)
    except TemplateSyntaxError as e:
        return _failed(target, "template-syntax", e)
    except DataLoadError as e:
        return _failed(target, "data", e)
    except MissingVariableError as e:
        return _failed(target, "render", e)
    except RecursionError as e:
        # deep data and templates fail earlier with their own error kinds
        return _failed(target, "render", e)
    except UnicodeDecodeError as e:
        return _failed(target, "io", e)
    except OSError as e:
        return _failed(target, "io", e)

    try:
        if not needs_write(target.output_path, candidate):
            logger.debug("Unchanged: %s", target.output_path)
            return GenerationOutcome(target=target, status=GenerationStatus.UNCHANGED)
        if check:
            logger.info("Stale: %s", target.output_path)
            return GenerationOutcome(target=target, status=GenerationStatus.STALE)
        write_bytes_atomic(target.output_path, candidate.encode("utf-8"))
    except OSError as e:
        return _failed(target, "io", e)

    logger.info("Written: %s", target.output_path)
    return GenerationOutcome(target=target, status=GenerationStatus.WRITTEN)


__all__ = ["builtin_scope", "render_target", "generate"]
