"""UTC clock adapter."""

from datetime import UTC, datetime


class UtcClockAdapter:
    """UTC implementation of ClockPort."""

    def now(self) -> datetime:
        return datetime.now(UTC)
