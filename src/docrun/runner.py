"""Build-doc runner.

Runs the documentation generator under the selected toolchain, then the
link checker when it is installed. The first non-zero exit aborts the run;
the caller's working directory is restored only when every step passed.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .config import RunnerConfig
from .core.context import RunContext
from .core.logging import log_event
from .core.process import probe_tool, run_command
from .errors import ScriptError, StepFailed
from .exit_codes import ERR_CHDIR

StepStatus = Literal["ok", "fail", "skip"]

GENERATE_DOCS = "generate-docs"
CHECK_LINKS = "check-links"


@dataclass(frozen=True)
class StepResult:
    step: str
    status: StepStatus
    command: list[str]
    code: int = 0
    duration_ms: int = 0

    def as_dict(self) -> dict[str, object]:
        return {
            "step": self.step,
            "status": self.status,
            "command": self.command,
            "code": self.code,
            "duration_ms": self.duration_ms,
        }


@dataclass
class DocsRun:
    project_dir: Path
    toolchain: str
    steps: list[StepResult] = field(default_factory=list)
    code: int = 0
    restored: bool = False

    @property
    def status(self) -> str:
        return "ok" if self.code == 0 else "fail"

    def to_payload(self, run_id: str) -> dict[str, object]:
        return {
            "schema_version": 1,
            "tool": "docrun",
            "run_id": run_id,
            "status": self.status,
            "code": self.code,
            "toolchain": self.toolchain,
            "project_dir": str(self.project_dir),
            "restored": self.restored,
            "steps": [step.as_dict() for step in self.steps],
        }


def read_toolchain(config: RunnerConfig, environ: Mapping[str, str] | None = None) -> str:
    # unset passes through as an empty token; the launcher rejects it
    env = os.environ if environ is None else environ
    return env.get(config.toolchain_env, "")


def generator_command(config: RunnerConfig, toolchain: str) -> list[str]:
    return [config.launcher, "run", toolchain, *config.generator]


def plan_docs(ctx: RunContext, config: RunnerConfig, toolchain: str | None = None) -> dict[str, object]:
    resolved = read_toolchain(config) if toolchain is None else toolchain
    checker_path = probe_tool(config.checker_probe)
    return {
        "schema_version": 1,
        "tool": "docrun",
        "run_id": ctx.run_id,
        "status": "ok",
        "dry_run": True,
        "project_dir": str(ctx.project_dir),
        "toolchain_env": config.toolchain_env,
        "toolchain": resolved,
        "generator": generator_command(config, resolved),
        "checker_probe": config.checker_probe,
        "checker_found": checker_path is not None,
        "checker_path": checker_path or "",
        "checker": list(config.checker),
    }


def _run_step(ctx: RunContext, run: DocsRun, step: str, cmd: list[str]) -> None:
    result = run_command(cmd, ctx.project_dir, ctx)
    run.steps.append(
        StepResult(
            step=step,
            status="ok" if result.ok else "fail",
            command=cmd,
            code=result.code,
            duration_ms=result.duration_ms,
        )
    )
    if not result.ok:
        run.code = result.code
        raise StepFailed(f"{step} failed with exit code {result.code}", result.code, step=step, run=run)


def run_docs(ctx: RunContext, config: RunnerConfig, toolchain: str | None = None) -> DocsRun:
    """Run the doc pipeline in `ctx.project_dir`.

    Raises `StepFailed` carrying the failing step's exit code. On that path the
    process stays in the project directory.
    """
    resolved = read_toolchain(config) if toolchain is None else toolchain
    run = DocsRun(project_dir=ctx.project_dir, toolchain=resolved)
    previous = Path.cwd()
    try:
        os.chdir(ctx.project_dir)
    except OSError as exc:
        raise ScriptError(f"cannot enter {ctx.project_dir}: {exc.strerror}", ERR_CHDIR, "chdir_error") from exc
    log_event(ctx, "debug", "runner", "chdir", path=str(ctx.project_dir), previous=str(previous))

    _run_step(ctx, run, GENERATE_DOCS, generator_command(config, resolved))

    checker_path = probe_tool(config.checker_probe)
    log_event(ctx, "debug", "runner", "probe", tool=config.checker_probe, found=checker_path is not None)
    if checker_path is None:
        run.steps.append(StepResult(step=CHECK_LINKS, status="skip", command=list(config.checker)))
    else:
        _run_step(ctx, run, CHECK_LINKS, list(config.checker))

    os.chdir(previous)
    run.restored = True
    return run
