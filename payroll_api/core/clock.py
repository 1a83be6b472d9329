from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone


class Clock(ABC):
    """
    Injectable time source for date-based business rules.

    now() returns a naive UTC datetime, matching the DateTime columns.
    """

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


class FixedClock(Clock):
    def __init__(self, fixed_time: datetime):
        if fixed_time.tzinfo is not None:
            fixed_time = fixed_time.astimezone(timezone.utc).replace(tzinfo=None)
        self._fixed_time = fixed_time

    def now(self) -> datetime:
        return self._fixed_time

    def advance(self, **kwargs) -> None:
        self._fixed_time = self._fixed_time + timedelta(**kwargs)


_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock
