"""Reporting clock: all day-boundary logic uses one fixed timezone."""
from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo

from app.config import get_settings


class Clock:
    def __init__(self, tz_name: str = "UTC"):
        self.tz = timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()


def previous_day(day: date) -> date:
    return day - timedelta(days=1)


@lru_cache
def get_clock() -> Clock:
    return Clock(get_settings().report_timezone)
