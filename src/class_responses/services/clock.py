"""Time helpers shared by services."""

from datetime import UTC, datetime


def now_ms() -> int:
    """Return the current UTC time in milliseconds since epoch."""
    return int(datetime.now(tz=UTC).timestamp() * 1000)
