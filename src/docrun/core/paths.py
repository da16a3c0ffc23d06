"""Runner directory resolution.

The runner works relative to the directory holding the invoked script, not
the caller's working directory.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

PROJECT_DIR_ENV = "DOCRUN_PROJECT_DIR"


def resolve_script_dir(argv0: str | None = None) -> Path:
    script = Path(argv0 if argv0 is not None else sys.argv[0])
    return script.resolve().parent


def resolve_project_dir(override: str | None = None, argv0: str | None = None) -> Path:
    raw = override or os.environ.get(PROJECT_DIR_ENV)
    if raw:
        return Path(raw).resolve()
    return resolve_script_dir(argv0)
