"""Clock abstraction so relative times can be computed against a fixed instant."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta

# Same default instant as clockwork's fake clock.
DEFAULT_FAKE_TIME = datetime(1984, 4, 4, tzinfo=UTC)


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time (timezone-aware)."""
        ...


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FakeClock(Clock):
    """Frozen clock for tests; only moves when advance() is called."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or DEFAULT_FAKE_TIME
        if self._now.tzinfo is None:
            self._now = self._now.replace(tzinfo=UTC)

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward by delta."""
        self._now = self._now + delta
