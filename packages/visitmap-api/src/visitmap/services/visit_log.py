"""Process-local, append-only visit log."""

import logging
import threading
from collections import deque
from datetime import datetime, timezone

from visitmap.schemas.visit import VisitRecord

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    """Return the current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class VisitLog:
    """Thread-safe in-memory log of visits, oldest first internally.

    When ``max_records`` is a positive integer the log behaves as a ring
    buffer and drops the oldest visit once full. ``None`` or ``0`` keeps
    every visit for the lifetime of the process.

    Not shared between processes; each worker keeps its own log.
    """

    def __init__(self, max_records: int | None = None) -> None:
        if max_records is not None and max_records < 0:
            raise ValueError(f"max_records must be >= 0, got {max_records}")
        self.max_records = max_records or None
        self._records: deque[VisitRecord] = deque(maxlen=self.max_records)
        self._lock = threading.Lock()
        self._last_time = ""

    def record(self, ip: str, country: str) -> VisitRecord:
        """Stamp the current time, append a new visit and return it."""
        with self._lock:
            # ISO-8601 UTC strings of equal width sort chronologically
            timestamp = max(_utc_timestamp(), self._last_time)
            self._last_time = timestamp
            visit = VisitRecord(ip=ip, country=country, time=timestamp)
            self._records.append(visit)
            total = len(self._records)

        logger.debug("Recorded visit ip=%s country=%s (%d in log)", ip, country, total)
        return visit

    def list_newest_first(self) -> list[VisitRecord]:
        """Return a snapshot of all visits, most recent first."""
        with self._lock:
            return list(reversed(self._records))

    def clear(self) -> None:
        """Drop every recorded visit."""
        with self._lock:
            self._records.clear()
            self._last_time = ""

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
