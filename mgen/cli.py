from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .diagnostics import run_diag
from .engine import list_targets, rel_posix, run_generate, run_render
from .errors import MGUserError
from .report_schema import GenerationReport
from .template.escaping import list_escapers
from .types import GenerationStatus, RunOptions
from .version import tool_version


_TRUTHY_ENV = {"1", "true", "yes", "on"}


def _debug_env() -> bool:
    return os.environ.get("MGEN_DEBUG", "").strip().lower() in _TRUTHY_ENV


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if (verbose or _debug_env()) else logging.WARNING
    log = logging.getLogger("mgen")
    log.setLevel(level)
    # drop the handler of a previous main() call unflushed: its stream may be closed
    for old in [h for h in log.handlers if h.get_name() == "mgen-cli"]:
        log.removeHandler(old)
    h = logging.StreamHandler(sys.stderr)
    h.set_name("mgen-cli")
    h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    log.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mgen",
        description="Mustache file generator (writes outputs only when their content changes)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Shared rendering options
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--strict",
            action="store_true",
            default=None,
            help="fail on unresolved variables instead of rendering them empty",
        )
        sp.add_argument(
            "--escape",
            choices=list_escapers(),
            default=None,
            help="escaping for {{name}} tags (default: from mgen.yaml, else html)",
        )
        sp.add_argument(
            "--verbose",
            action="store_true",
            help="debug logging to stderr (same as MGEN_DEBUG=1)",
        )

    sp_gen = sub.add_parser("generate", help="Render every template and write changed outputs")
    sp_gen.add_argument(
        "paths",
        nargs="*",
        type=Path,
        metavar="PATH",
        help="template files or directories to scan (default: current directory)",
    )
    add_common(sp_gen)
    sp_gen.add_argument(
        "--check",
        action="store_true",
        help="write nothing; exit 1 if any output is stale",
    )
    sp_gen.add_argument(
        "--no-header",
        action="store_true",
        help="do not prepend the generated-file header",
    )
    sp_gen.add_argument(
        "--jobs",
        type=int,
        default=None,
        metavar="N",
        help="number of worker threads",
    )
    sp_gen.add_argument(
        "--json",
        action="store_true",
        help="print the JSON report to stdout",
    )

    sp_render = sub.add_parser("render", help="Render one template to stdout (no header, no write)")
    sp_render.add_argument("template", type=Path, help="template file")
    sp_render.add_argument("data", type=Path, nargs="?", default=None, help="data file (default: companion file)")
    add_common(sp_render)

    sp_list = sub.add_parser("list", help="Discovered targets (JSON)")
    sp_list.add_argument("paths", nargs="*", type=Path, metavar="PATH")
    sp_list.add_argument("--verbose", action="store_true", help="debug logging to stderr")

    sp_diag = sub.add_parser("diag", help="Environment and configuration diagnostics (JSON)")
    sp_diag.add_argument("--verbose", action="store_true", help="debug logging to stderr")

    return p


def _emit_json(payload) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")


def _opts(ns: argparse.Namespace) -> RunOptions:
    if getattr(ns, "jobs", None) is not None and ns.jobs < 1:
        raise ValueError("--jobs must be a positive integer")
    return RunOptions(
        escape=getattr(ns, "escape", None),
        strict=getattr(ns, "strict", None),
        header="none" if getattr(ns, "no_header", False) else None,
        jobs=getattr(ns, "jobs", None),
        check=bool(getattr(ns, "check", False)),
    )


def _print_report(report: GenerationReport) -> None:
    for row in report.results:
        if row.status is GenerationStatus.FAILED and row.error is not None:
            sys.stderr.write(f"FAILED     {row.template}: {row.error.kind}: {row.error.message}\n")
        else:
            sys.stderr.write(f"{row.status.value:<10} {row.output}\n")
    s = report.summary
    sys.stderr.write(
        f"{s.total} target(s): {s.written} written, {s.unchanged} unchanged, "
        f"{s.stale} stale, {s.failed} failed\n"
    )


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(getattr(ns, "verbose", False)))

    try:
        if ns.cmd == "generate":
            report = run_generate(ns.paths, _opts(ns))
            if ns.json:
                _emit_json(report.model_dump(mode="json"))
            else:
                _print_report(report)
            return 0 if report.ok else 1

        if ns.cmd == "render":
            text = run_render(ns.template, ns.data, _opts(ns))
            sys.stdout.write(text)
            return 0

        if ns.cmd == "list":
            root = Path.cwd().resolve()
            targets = list_targets(ns.paths, RunOptions())
            data = {
                "targets": [
                    {
                        "template": rel_posix(t.template_path, root),
                        "data": rel_posix(t.data_path, root),
                        "output": rel_posix(t.output_path, root),
                    }
                    for t in targets
                ]
            }
            _emit_json(data)
            return 0

        if ns.cmd == "diag":
            report = run_diag()
            _emit_json(report.model_dump(mode="json"))
            return 0

    except MGUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except OSError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
