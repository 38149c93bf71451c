"""
In-memory check status per alert: latest StatusEvent, when it was last checked, and which
alerts have a check in flight. Lost on restart; it is UI state, not stored data.
"""
import threading
from datetime import datetime, timezone

from tee_alerts.schemas import StatusEvent


class CheckStatusBoard:
    """Thread-safe: API handlers, the scheduler thread and check coroutines all touch it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest: dict[str, StatusEvent] = {}
        self._last_checked: dict[str, datetime] = {}
        self._in_flight: set[str] = set()

    def publish(self, event: StatusEvent) -> None:
        with self._lock:
            self._latest[event.request_id] = event

    def get(self, request_id: str) -> StatusEvent | None:
        with self._lock:
            return self._latest.get(request_id)

    def snapshot(self) -> dict[str, StatusEvent]:
        with self._lock:
            return dict(self._latest)

    def begin(self, request_id: str) -> bool:
        """Claim the alert for one check. False while another check for it is outstanding."""
        with self._lock:
            if request_id in self._in_flight:
                return False
            self._in_flight.add(request_id)
            return True

    def end(self, request_id: str, *, checked_at: datetime | None = None) -> None:
        with self._lock:
            self._in_flight.discard(request_id)
            self._last_checked[request_id] = checked_at or datetime.now(timezone.utc)

    def is_running(self, request_id: str) -> bool:
        with self._lock:
            return request_id in self._in_flight

    def last_checked_at(self, request_id: str) -> datetime | None:
        with self._lock:
            return self._last_checked.get(request_id)

    def clear(self, request_id: str) -> None:
        """Forget everything about a deleted alert (an in-flight check still finishes)."""
        with self._lock:
            self._latest.pop(request_id, None)
            self._last_checked.pop(request_id, None)


status_board = CheckStatusBoard()
