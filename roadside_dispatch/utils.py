import threading
from datetime import datetime, timedelta, timezone

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class MonotonicClock:
    """Issues UTC timestamps that always move forward, even within one microsecond."""

    def __init__(self):
        self._lock = threading.Lock()
        self._last = _EPOCH

    def now(self) -> datetime:
        with self._lock:
            current = datetime.now(timezone.utc)
            if current <= self._last:
                current = self._last + timedelta(microseconds=1)
            self._last = current
            return current

    def now_iso(self) -> str:
        return to_iso(self.now())

    def observe(self, value) -> None:
        """Never issue a timestamp earlier than one already stored."""
        ts = parse_timestamp(value)
        with self._lock:
            if ts > self._last:
                self._last = ts


def to_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value) -> datetime:
    # Accepts both our own isoformat output and JavaScript's "...Z" form
    if not value:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def text_sort_key(value):
    text = "" if value is None else str(value)
    return (text.casefold(), text)


def next_id(records: list) -> int:
    ids = [r["id"] for r in records if isinstance(r.get("id"), int)]
    return max(ids) + 1 if ids else 1
