from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from docrun.core.context import RunContext

from helpers import Toolbox, ToolboxFactory, make_toolbox

_ALLOWED_MARKERS = {"unit"}

settings.register_profile(
    "docrun",
    database=None,
    deadline=None,
    max_examples=25,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("docrun")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "crate"
    path.mkdir()
    (path / "Cargo.toml").write_text('[package]\nname = "crate"\nversion = "0.1.0"\n', encoding="utf-8")
    return path


@pytest.fixture
def caller_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "caller"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def ctx(project_dir: Path) -> RunContext:
    return RunContext.from_args("t-run", str(project_dir), quiet=True)


@pytest.fixture
def toolbox_factory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ToolboxFactory:
    def _make(generator_code: int = 0, checker_code: int | None = None, toolchain: str | None = None) -> Toolbox:
        box = make_toolbox(tmp_path / "tools", generator_code, checker_code)
        monkeypatch.setenv("PATH", str(box.bin_dir))
        if toolchain is None:
            monkeypatch.delenv("NIGHTLY_TOOLCHAIN", raising=False)
        else:
            monkeypatch.setenv("NIGHTLY_TOOLCHAIN", toolchain)
        return box

    return _make
