"""Tests for calendar date / day number conversion."""

import math
import pytest
from datetime import datetime

from atmosphere.julian import CalendarDate, from_day_number, to_day_number


class TestToDayNumber:
    """Tests for to_day_number."""

    def test_reference_epoch(self):
        """2000-01-01 12:00:00 is day number 2451545.0."""
        assert to_day_number(CalendarDate(2000, 1, 1, 12, 0, 0, 0)) == 2451545.0

    def test_midnight_is_half_day_earlier(self):
        """Midnight falls half a day before noon."""
        assert to_day_number(CalendarDate(2000, 1, 1, 0)) == 2451544.5

    def test_known_date(self):
        """2024-06-21 noon is 2460483.0."""
        assert to_day_number(CalendarDate(2024, 6, 21, 12)) == 2460483.0

    def test_leap_day(self):
        """Leap day sits between February 28 and March 1."""
        feb_28 = to_day_number(CalendarDate(2024, 2, 28, 12))
        feb_29 = to_day_number(CalendarDate(2024, 2, 29, 12))
        mar_1 = to_day_number(CalendarDate(2024, 3, 1, 12))
        assert feb_29 - feb_28 == 1
        assert mar_1 - feb_29 == 1

    def test_time_fields(self):
        """Minutes, seconds and milliseconds add fractional days."""
        base = to_day_number(CalendarDate(2010, 5, 5, 12))
        later = to_day_number(CalendarDate(2010, 5, 5, 12, 30, 15, 500))
        expected = 30 / 1440 + 15 / 86400 + 500 / 86400000
        assert later - base == pytest.approx(expected, abs=1e-9)

    def test_day_overflow_is_linear(self):
        """A day past the end of the month equals the next month's day."""
        overflow = to_day_number(CalendarDate(2024, 1, 32, 12))
        assert overflow == to_day_number(CalendarDate(2024, 2, 1, 12))

    def test_monotonic_over_a_year(self):
        """First days of consecutive months are increasing."""
        values = [to_day_number(CalendarDate(2023, month, 1, 12)) for month in range(1, 13)]
        assert values == sorted(values)
        assert values[-1] - values[0] == 334


class TestFromDayNumber:
    """Tests for from_day_number."""

    def test_reference_epoch(self):
        """2451545.0 converts back to 2000-01-01 12:00."""
        assert from_day_number(2451545.0) == CalendarDate(2000, 1, 1, 12)

    def test_noon_gets_day_correction(self):
        """Noon values land on the correct civil day."""
        assert from_day_number(2460483.0) == CalendarDate(2024, 6, 21, 12)

    def test_evening(self):
        """Hours after 18:00 stay on the same day."""
        result = from_day_number(2460483.0 + 8 / 24)
        assert (result.year, result.month, result.day, result.hour) == (2024, 6, 21, 20)

    def test_after_midnight_rolls_to_next_day(self):
        """Raw hours past 24 roll onto the next day."""
        result = from_day_number(2460483.0 + 15 / 24)
        assert (result.year, result.month, result.day, result.hour) == (2024, 6, 22, 3)

    def test_month_end_rollover(self):
        """Early-morning values on the first of a month normalize correctly."""
        day_number = to_day_number(CalendarDate(2024, 7, 1, 3))
        result = from_day_number(day_number)
        assert (result.month, result.day, result.hour) == (7, 1, 3)

    def test_correction_window_is_a_parameter(self):
        """An empty correction window leaves the raw day uncorrected."""
        result = from_day_number(2460483.0, correction_hours=(0, 0))
        assert (result.month, result.day, result.hour) == (6, 20, 12)

    def test_nan_raises(self):
        """NaN cannot be converted to a date."""
        with pytest.raises(ValueError):
            from_day_number(math.nan)


class TestRoundTrip:
    """Round trip date -> day number -> date."""

    @pytest.mark.parametrize("date", [
        CalendarDate(2001, 1, 1, 0, 0, 0, 0),
        CalendarDate(2004, 2, 29, 23, 59, 59, 999),
        CalendarDate(2014, 4, 14, 17, 23, 37, 0),
        CalendarDate(2024, 3, 1, 6, 30, 0, 0),
        CalendarDate(2024, 6, 21, 12, 0, 0, 0),
        CalendarDate(2024, 6, 21, 18, 0, 0, 0),
        CalendarDate(2024, 12, 31, 23, 0, 0, 0),
        CalendarDate(2050, 7, 15, 13, 45, 10, 250),
        CalendarDate(2099, 12, 31, 11, 59, 59, 0),
    ])
    def test_round_trip_within_one_second(self, date):
        """Converting back reproduces the date to within one second."""
        result = from_day_number(to_day_number(date))
        delta = abs((result.to_datetime() - date.to_datetime()).total_seconds())
        assert delta <= 1.0

    def test_round_trip_every_hour(self):
        """Every hour of a day survives the round trip."""
        for hour in range(24):
            for minute in (0, 29, 59):
                date = CalendarDate(2031, 10, 9, hour, minute, 30)
                result = from_day_number(to_day_number(date))
                delta = abs((result.to_datetime() - date.to_datetime()).total_seconds())
                assert delta <= 1.0, f"{date} -> {result}"

    def test_midnight_is_exact(self):
        """Whole hours come back without a stray minute or second."""
        date = CalendarDate(2001, 1, 1, 0)
        assert from_day_number(to_day_number(date)) == date

    @pytest.mark.parametrize("hour", [0, 6, 18])
    def test_quarter_days_are_exact(self, hour):
        date = CalendarDate(2024, 6, 21, hour)
        assert from_day_number(to_day_number(date)) == date

    def test_whole_and_half_hours_across_the_century(self):
        """Every whole and half hour, three days a month, 2001 to 2099."""
        for year in range(2001, 2100):
            for month in range(1, 13):
                for day in (1, 15, 28):
                    for half_hour in range(48):
                        date = CalendarDate(year, month, day, half_hour // 2, 30 * (half_hour % 2), 0)
                        result = from_day_number(to_day_number(date))
                        delta = abs((result.to_datetime() - date.to_datetime()).total_seconds())
                        assert delta < 0.002, f"{date} -> {result}"


class TestCalendarDate:
    """Tests for CalendarDate helpers."""

    def test_from_datetime(self):
        """Should copy fields and truncate microseconds to milliseconds."""
        date = CalendarDate.from_datetime(datetime(2014, 4, 14, 17, 23, 37, 123456))
        assert date == CalendarDate(2014, 4, 14, 17, 23, 37, 123)

    def test_to_datetime_normalizes_overflow(self):
        """Day overflow rolls into the next month."""
        assert CalendarDate(2024, 1, 32, 6).to_datetime() == datetime(2024, 2, 1, 6)

    def test_isoformat(self):
        """Should format with millisecond precision."""
        assert CalendarDate(2024, 6, 1, 5, 4, 3, 21).isoformat() == "2024-06-01T05:04:03.021"

    def test_is_immutable(self):
        """Fields cannot be assigned."""
        date = CalendarDate(2024, 6, 1)
        with pytest.raises(AttributeError):
            date.day = 2
