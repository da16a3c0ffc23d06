from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from ..run_id import make_run_id
from .paths import resolve_project_dir

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    project_dir: Path
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool

    @classmethod
    def from_args(
        cls,
        run_id: str | None,
        project_dir: str | None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool | None = None,
        argv0: str | None = None,
    ) -> "RunContext":
        resolved_dir = resolve_project_dir(project_dir, argv0)
        resolved_run_id = run_id or os.environ.get("RUN_ID") or make_run_id(resolved_dir)
        resolved_log_json = ("CI" in os.environ) if log_json is None else log_json
        return cls(
            run_id=resolved_run_id,
            project_dir=resolved_dir,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=resolved_log_json,
        )
