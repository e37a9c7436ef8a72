"""Interface Clock - port abstracting system time."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """
    Port for system time.

    Lets tests inject a fixed clock for deterministic expiry and caching.
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Current date/time.

        Returns:
            Timezone-aware datetime in UTC.
        """
        raise NotImplementedError

    @abstractmethod
    def today(self) -> datetime:
        """
        Current date without time.

        Returns:
            datetime at 00:00:00 UTC.
        """
        raise NotImplementedError


class SystemClock(Clock):
    """Real implementation backed by the system clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> datetime:
        now = datetime.now(timezone.utc)
        return now.replace(hour=0, minute=0, second=0, microsecond=0)


class FakeClock(Clock):
    """
    Fake implementation for tests.

    Time only moves when the test moves it.
    """

    def __init__(self, fixed_time: datetime | None = None):
        """
        Args:
            fixed_time: Time to return. Defaults to the real time at construction.
        """
        self._fixed_time = fixed_time or datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._fixed_time

    def today(self) -> datetime:
        return self._fixed_time.replace(hour=0, minute=0, second=0, microsecond=0)

    def advance(self, seconds: int = 0, minutes: int = 0, hours: int = 0, days: int = 0) -> None:
        """
        Move the fixed time forward.

        Args:
            seconds: Seconds to advance.
            minutes: Minutes to advance.
            hours: Hours to advance.
            days: Days to advance.
        """
        delta = timedelta(seconds=seconds, minutes=minutes, hours=hours, days=days)
        self._fixed_time = self._fixed_time + delta
