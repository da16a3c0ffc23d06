from __future__ import annotations

ERR_CHDIR = 1
ERR_CONFIG = 3
ERR_INTERNAL = 99
ERR_NOT_EXECUTABLE = 126
ERR_NOT_FOUND = 127
SIGNAL_BASE = 128
ERR_INTERRUPTED = SIGNAL_BASE + 2
