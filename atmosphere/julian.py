"""
Conversion between calendar dates and continuous day numbers.

A day number is a real-valued count of days whose integer part is the
day index and whose fractional part is the time of day anchored at noon
(2000-01-01 12:00:00 is exactly 2451545.0). Every astronomical
computation in the package works on day numbers.

The inverse conversion applies a fixed "+1 day" correction for raw hours
in [12, 18). Together with the -0.125 day offset applied to sunrise and
sunset, it stands in for a real timezone model. With the default
correction the round trip holds to within one second for dates from
March 2000 through 2099.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

# Raw hours (12-35) of the inverse transform that receive the +1 day correction
DAY_CORRECTION_HOURS: tuple[float, float] = (12, 18)


@dataclass(frozen=True)
class CalendarDate:
    """
    Calendar date and wall-clock time with millisecond resolution.

    `day` may exceed the length of its month: the simulated clock carries
    up to days but never into months or years.
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    @classmethod
    def from_datetime(cls, value: datetime) -> "CalendarDate":
        return cls(
            year=value.year,
            month=value.month,
            day=value.day,
            hour=value.hour,
            minute=value.minute,
            second=value.second,
            millisecond=value.microsecond // 1000,
        )

    @classmethod
    def now(cls) -> "CalendarDate":
        """Current local wall-clock date and time."""
        return cls.from_datetime(datetime.now())

    def to_datetime(self) -> datetime:
        """
        Normalize onto the real calendar.

        Days beyond the end of the month roll into the following months.
        """
        return datetime(self.year, self.month, 1) + timedelta(
            days=self.day - 1,
            hours=self.hour,
            minutes=self.minute,
            seconds=self.second,
            milliseconds=self.millisecond,
        )

    def isoformat(self) -> str:
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}T"
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}.{self.millisecond:03d}"
        )


def to_day_number(date: CalendarDate) -> float:
    """
    Convert a calendar date to its day number.

    Proleptic Gregorian calendar, months counted from March so that the
    leap day falls at the end of the computational year.

    Args:
        date: Calendar date (day overflow past month end is allowed)

    Returns:
        Day number (2451545.0 for 2000-01-01 12:00:00)
    """
    a = math.floor((date.month - 3) / 12)
    b = date.year + a
    c = math.floor(b / 100)
    d = b % 100
    e = date.month - 12 * a - 3

    return (
        math.floor(146097 * c / 4)
        + math.floor(36525 * d / 100)
        + math.floor((153 * e + 2) / 5)
        + date.day
        + 1721119
        + (date.hour - 12) / 24
        + date.minute / 1440
        + date.second / 86400
        + date.millisecond / 86400000
    )


def from_day_number(
    day_number: float,
    correction_hours: tuple[float, float] = DAY_CORRECTION_HOURS,
) -> CalendarDate:
    """
    Convert a day number back to a calendar date.

    The time of day is floored to whole milliseconds, so the result may be
    up to one millisecond short of the input date.

    Args:
        day_number: Finite day number
        correction_hours: Half-open range of raw hours that get one day added

    Returns:
        Calendar date, normalized onto the real calendar

    Raises:
        ValueError: If day_number is NaN
    """
    f = 4 * (day_number - 1721120) + 3
    g = math.floor(f / 146097)
    h = 100 * math.floor((f % 146097) / 4) + 99
    i = math.floor(h / 36525)
    j = 5 * math.floor((h % 36525) / 100) + 2
    k = math.floor(j / 153)
    n = math.floor((k + 2) / 12)
    t = day_number % 1

    year = 100 * g + i + n
    month = k - 12 * n + 3
    day = math.floor((j % 153) / 5)

    # Split the fraction once so the fields cannot disagree
    total_ms = math.floor(t * 86400000 + 1e-6)
    hour, rest = divmod(total_ms, 3600000)
    minute, rest = divmod(rest, 60000)
    second, millisecond = divmod(rest, 1000)
    hour += 12

    low, high = correction_hours
    if low <= hour < high:
        day += 1

    # Raw hour runs 12-35 and raw day may be 0
    raw = CalendarDate(year, month, day, hour, minute, second, millisecond)
    return CalendarDate.from_datetime(raw.to_datetime())
