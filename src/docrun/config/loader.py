from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG

CONFIG_FILENAME = "docrun.yaml"
CONFIG_SCHEMA = Path(__file__).resolve().with_name("docrun-config.schema.json")


@dataclass(frozen=True)
class RunnerConfig:
    toolchain_env: str = "NIGHTLY_TOOLCHAIN"
    launcher: str = "rustup"
    generator: tuple[str, ...] = ("cargo", "doc")
    checker_probe: str = "cargo-deadlinks"
    checker: tuple[str, ...] = ("cargo", "deadlinks")


@lru_cache(maxsize=1)
def _schema() -> dict[str, Any]:
    return json.loads(CONFIG_SCHEMA.read_text(encoding="utf-8"))


def _config_error(message: str) -> ScriptError:
    return ScriptError(message, ERR_CONFIG, "config_error")


def load_runner_config(project_dir: Path, path: Path | None = None) -> RunnerConfig:
    """Load `docrun.yaml` from the project dir, or an explicit file.

    A missing default file means built-in defaults; a missing explicit file is an error.
    """
    cfg_path = path if path is not None else project_dir / CONFIG_FILENAME
    if not cfg_path.is_file():
        if path is None:
            return RunnerConfig()
        raise _config_error(f"config file not found: {cfg_path}")
    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise _config_error(f"{cfg_path}: invalid YAML: {exc}") from exc
    if data is None:
        data = {}
    try:
        jsonschema.validate(data, _schema())
    except jsonschema.ValidationError as exc:
        where = ".".join(str(p) for p in exc.absolute_path) or "<root>"
        raise _config_error(f"{cfg_path}: {where}: {exc.message}") from exc
    values = {key: tuple(value) if isinstance(value, list) else value for key, value in data.items()}
    return RunnerConfig(**values)
