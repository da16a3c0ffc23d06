from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exit_codes import ERR_INTERNAL

if TYPE_CHECKING:
    from .runner import DocsRun


@dataclass
class ScriptError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


@dataclass
class StepFailed(ScriptError):
    """A pipeline step exited non-zero; `code` is that step's exit status."""

    kind: str = "step_failed"
    step: str = ""
    run: DocsRun | None = None
