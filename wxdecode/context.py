"""Reference date used to resolve the partial timestamps of a report."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from pydantic import model_validator

from wxdecode.records import Record

logger = logging.getLogger(__name__)


class DecodeContext(Record):
    """
    The "current date" a report is read against.

    Reports only carry day/hour/minute. Year and month (and the day for
    clock-time trend markers) come from here, so every decode call gets
    its own context instead of reading the system clock.
    """

    year: int
    month: int
    day: int

    @model_validator(mode="after")
    def check_date(self) -> "DecodeContext":
        date(self.year, self.month, self.day)
        return self

    @classmethod
    def from_date(cls, value: date) -> "DecodeContext":
        return cls(year=value.year, month=value.month, day=value.day)

    @classmethod
    def today(cls) -> "DecodeContext":
        """Context for the current UTC date."""
        return cls.from_date(datetime.now(timezone.utc).date())

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)

    def resolve_day_time(self, day: int, hour: int, minute: int = 0) -> Optional[datetime]:
        """
        Resolve a day/hour/minute triple inside the context month.

        Hour 24 (minute 0) is the midnight ending the given day.

        Returns:
            UTC datetime, or None when the values do not form a date
        """
        return _build(self.year, self.month, day, hour, minute)

    def resolve_clock_time(self, hour: int, minute: int) -> Optional[datetime]:
        """Resolve a time of day on the context day ("2400" is the following midnight)."""
        return _build(self.year, self.month, self.day, hour, minute)


def _build(year: int, month: int, day: int, hour: int, minute: int) -> Optional[datetime]:
    rollover = hour == 24 and minute == 0
    try:
        result = datetime(year, month, day, 0 if rollover else hour, minute, tzinfo=timezone.utc)
    except ValueError as e:
        logger.warning(f"Invalid timestamp day={day:02d} hour={hour:02d} minute={minute:02d}: {e}")
        return None
    if rollover:
        result += timedelta(days=1)
    return result


def add_month(value: datetime) -> Optional[datetime]:
    """Move a datetime one calendar month forward, None if the day does not exist there."""
    year, month = (value.year + 1, 1) if value.month == 12 else (value.year, value.month + 1)
    try:
        return value.replace(year=year, month=month)
    except ValueError as e:
        logger.warning(f"Cannot move {value.isoformat()} to the following month: {e}")
        return None
