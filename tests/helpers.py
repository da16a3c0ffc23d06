from __future__ import annotations

import os
import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

_STUB = """#!/bin/sh
{{
  printf '%s' '{name}'
  for arg in "$@"; do printf ' [%s]' "$arg"; done
  printf ' cwd=%s\\n' "$(pwd -P)"
}} >> '{log}'
{body}
"""


@dataclass(frozen=True)
class Call:
    tool: str
    args: list[str]
    cwd: str


@dataclass(frozen=True)
class Toolbox:
    bin_dir: Path
    log: Path

    def calls(self) -> list[Call]:
        if not self.log.exists():
            return []
        out: list[Call] = []
        for line in self.log.read_text(encoding="utf-8").splitlines():
            head, _, cwd = line.rpartition(" cwd=")
            tool, _, rest = head.partition(" ")
            args = [chunk[1:-1] for chunk in rest.split(" ")] if rest else []
            out.append(Call(tool=tool, args=args, cwd=cwd))
        return out

    def calls_to(self, tool: str) -> list[Call]:
        return [call for call in self.calls() if call.tool == tool]


def write_stub(bin_dir: Path, name: str, log: Path, exit_code: int = 0, body: str | None = None) -> Path:
    bin_dir.mkdir(parents=True, exist_ok=True)
    path = bin_dir / name
    path.write_text(_STUB.format(name=name, log=log, body=body or f"exit {exit_code}"), encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def make_toolbox(root: Path, generator_code: int = 0, checker_code: int | None = None) -> Toolbox:
    """Stub `rustup`, `cargo` and, when `checker_code` is set, `cargo-deadlinks`."""
    bin_dir = root / "bin"
    log = root / "calls.log"
    write_stub(bin_dir, "rustup", log, generator_code)
    write_stub(bin_dir, "cargo", log, 0 if checker_code is None else checker_code)
    if checker_code is not None:
        write_stub(bin_dir, "cargo-deadlinks", log, 0)
    return Toolbox(bin_dir=bin_dir, log=log)


def real_path(path: Path | str) -> str:
    return os.path.realpath(str(path))


ToolboxFactory = Callable[..., Toolbox]
