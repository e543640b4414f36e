from __future__ import annotations

import time


def now_ts() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())
