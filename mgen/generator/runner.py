from __future__ import annotations

import concurrent.futures
import logging
from typing import List, Sequence

from .generator import generate
from ..config import GeneratorConfig
from ..template import TemplateProcessor
from ..types import GenerationOutcome, GenerationTarget

logger = logging.getLogger(__name__)


def generate_all(
    targets: Sequence[GenerationTarget],
    cfg: GeneratorConfig,
    *,
    check: bool = False,
) -> List[GenerationOutcome]:
    """
    Generates every target; outcomes come back in the order of targets.

    Targets share nothing but the parsed-template cache, so with jobs > 1
    they run on a thread pool.
    One failed target never stops the others.
    """
    processor = TemplateProcessor(escape=cfg.escape, strict=cfg.strict)

    def _one(target: GenerationTarget) -> GenerationOutcome:
        return generate(target, cfg, check=check, processor=processor)

    if cfg.jobs <= 1 or len(targets) <= 1:
        return [_one(t) for t in targets]

    logger.debug("Generating %d target(s) with %d worker(s)", len(targets), cfg.jobs)
    with concurrent.futures.ThreadPoolExecutor(max_workers=cfg.jobs) as executor:
        return list(executor.map(_one, targets))


__all__ = ["generate_all"]
