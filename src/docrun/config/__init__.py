from __future__ import annotations

from .loader import CONFIG_FILENAME, RunnerConfig, load_runner_config

__all__ = ["CONFIG_FILENAME", "RunnerConfig", "load_runner_config"]
