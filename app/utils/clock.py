import threading
from datetime import datetime, timedelta, timezone
from typing import Optional


_lock = threading.Lock()
_last: Optional[datetime] = None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def monotonic_utc_now() -> datetime:
    """
    Creation timestamp for items and claims.

    Strictly increasing within one process, so ordering rows by timestamp
    gives their creation order even when the wall clock stalls or steps back.
    """
    global _last

    with _lock:
        now = utc_now()

        if _last is not None and now <= _last:
            now = _last + timedelta(microseconds=1)

        _last = now
        return now
