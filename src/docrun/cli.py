from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .config import load_runner_config
from .core.context import RunContext
from .core.logging import log_event
from .errors import ScriptError, StepFailed
from .exit_codes import ERR_INTERNAL, ERR_INTERRUPTED
from .runner import plan_docs, run_docs


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="docrun",
        description="Generate crate docs with the selected toolchain and check their links.",
    )
    p.add_argument("--version", action="version", version=f"docrun {__version__}")
    p.add_argument("--run-id", help="run identifier for log events")
    p.add_argument("--project-dir", help="directory to run in (default: directory of the invoked script)")
    p.add_argument("--config", help="runner config file (default: <project-dir>/docrun.yaml if present)")
    p.add_argument("--toolchain", help="toolchain identifier (default: value of the configured env var)")
    p.add_argument("--format", choices=["text", "json"], default="text", help="report format")
    p.add_argument("--log-json", action="store_true", default=None, help="emit log events as JSON lines")
    p.add_argument("--dry-run", action="store_true", help="print the resolved plan and exit")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="suppress log events")
    return p


def _emit(payload: dict[str, object], as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, sort_keys=True))
    else:
        print(json.dumps(payload, indent=2, sort_keys=True))


def _emit_error(as_json: bool, message: str, code: int, kind: str = "internal_error") -> None:
    if as_json:
        print(
            json.dumps(
                {
                    "schema_version": 1,
                    "tool": "docrun",
                    "status": "fail",
                    "error": {"message": message, "code": code, "kind": kind},
                },
                sort_keys=True,
            ),
            file=sys.stderr,
        )
    else:
        print(message, file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    as_json = ns.format == "json"
    try:
        ctx = RunContext.from_args(
            ns.run_id,
            ns.project_dir,
            ns.format,
            ns.verbose,
            ns.quiet,
            ns.log_json,
        )
        config = load_runner_config(ctx.project_dir, Path(ns.config) if ns.config else None)
        log_event(ctx, "debug", "cli", "start", project_dir=str(ctx.project_dir), toolchain_env=config.toolchain_env)
        if ns.dry_run:
            _emit(plan_docs(ctx, config, ns.toolchain), as_json)
            return 0
        run = run_docs(ctx, config, ns.toolchain)
        if as_json:
            _emit(run.to_payload(ctx.run_id), True)
        return run.code
    except StepFailed as exc:
        # the failing tool already reported its own diagnostics
        if as_json and exc.run is not None:
            _emit(exc.run.to_payload(ctx.run_id), True)
        return exc.code
    except ScriptError as exc:
        _emit_error(as_json, str(exc), exc.code, exc.kind)
        return exc.code
    except KeyboardInterrupt:
        return ERR_INTERRUPTED
    except Exception as exc:  # pragma: no cover
        _emit_error(as_json, f"internal error: {exc}", ERR_INTERNAL)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
