from __future__ import annotations

import threading
import time

_id_lock = threading.Lock()
_last_millis = 0


def new_record_id(prefix: str) -> str:
    """Generate a record id such as ``cli1718900000000`` from epoch milliseconds.

    Ids handed out by this process are strictly increasing even within one millisecond.
    """
    global _last_millis
    with _id_lock:
        millis = max(time.time_ns() // 1_000_000, _last_millis + 1)
        _last_millis = millis
    return f"{prefix}{millis}"
