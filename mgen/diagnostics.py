from __future__ import annotations

import platform
import sys
from dataclasses import asdict
from pathlib import Path

from .config import cfg_path, load_config
from .generator import discover_targets
from .report_schema import DiagConfig, DiagEnv, DiagReport
from .version import tool_version


def run_diag() -> DiagReport:
    """
    Builds the diagnostics JSON report. Never raises: every failure becomes
    an "error" string in the corresponding block.
    """
    root = Path.cwd().resolve()

    # --- ENV / platform ---
    env = DiagEnv(
        python=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        platform=f"{platform.system()} {platform.release()} ({platform.machine()})",
        cwd=str(root),
    )

    # --- Config ---
    path = cfg_path(root)
    cfg_block = DiagConfig(path=str(path), exists=path.is_file())
    cfg = None
    try:
        cfg = load_config(root)
        cfg_block.values = asdict(cfg)
    except Exception as e:
        cfg_block.error = str(e)

    report = DiagReport(tool_version=tool_version(), env=env, config=cfg_block)

    # --- Templates ---
    if cfg is not None:
        try:
            report.templates = [
                t.template_path.relative_to(root).as_posix()
                for t in discover_targets(root, cfg)
            ]
        except Exception as e:
            report.discovery_error = str(e)

    return report


__all__ = ["run_diag"]
