import time
from datetime import UTC, datetime


def now_ms() -> int:
    """Milliseconds since the epoch, the timestamp unit used on the wire."""
    return int(time.time() * 1000)


def iso_now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")
