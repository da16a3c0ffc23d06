from __future__ import annotations

import shlex
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..exit_codes import ERR_NOT_EXECUTABLE, ERR_NOT_FOUND, SIGNAL_BASE
from .logging import log_event

if TYPE_CHECKING:
    from .context import RunContext


@dataclass(frozen=True)
class CommandResult:
    code: int
    duration_ms: int

    @property
    def ok(self) -> bool:
        return self.code == 0


def _shell_status(returncode: int) -> int:
    # subprocess reports death-by-signal as -N; shells report 128+N
    return SIGNAL_BASE - returncode if returncode < 0 else returncode


def run_command(cmd: list[str], cwd: Path, ctx: RunContext | None = None) -> CommandResult:
    """Run `cmd` to completion with inherited stdio and return its shell-style exit status."""
    rendered = shlex.join(cmd)
    if ctx is not None:
        log_event(ctx, "info", "process", "exec", command=rendered, cwd=str(cwd))
    started = time.monotonic()
    try:
        proc = subprocess.run(cmd, cwd=cwd, check=False)
        code = _shell_status(proc.returncode)
    except FileNotFoundError:
        code = ERR_NOT_FOUND
        if ctx is not None:
            log_event(ctx, "error", "process", "not-found", command=cmd[0])
    except OSError:
        # PermissionError, or ENOEXEC for a file with no interpreter line
        code = ERR_NOT_EXECUTABLE
        if ctx is not None:
            log_event(ctx, "error", "process", "not-executable", command=cmd[0])
    result = CommandResult(code=code, duration_ms=int((time.monotonic() - started) * 1000))
    if ctx is not None:
        log_event(
            ctx,
            "info",
            "process",
            "run-command",
            command=rendered,
            code=result.code,
            duration_ms=result.duration_ms,
        )
    return result


def probe_tool(name: str) -> str | None:
    return shutil.which(name)
