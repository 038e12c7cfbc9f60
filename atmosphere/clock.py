"""
Simulated wall clock.

Owns the authoritative current CalendarDate and advances it by real
elapsed time multiplied by a timescale. Carries stop at the day field:
running long enough overflows `day` past the end of the month instead of
rolling into the next month or year.

Steps are applied in whole milliseconds; the sub-millisecond remainder is
carried into the next advance, so frame-sized steps neither drift nor stall.

The clock does not decide when sunrise/sunset or seasons are
recomputed; the engine checks that after each advance.
"""

import math

from atmosphere.julian import CalendarDate, to_day_number
from atmosphere.logger import logger


class TimeClock:
    """Current simulated date, replaced wholesale on every advance."""

    def __init__(self, date: CalendarDate):
        self._date = date
        self._pending_ms = 0.0

    @property
    def date(self) -> CalendarDate:
        return self._date

    @property
    def day_number(self) -> float:
        return to_day_number(self._date)

    def set(self, date: CalendarDate):
        """Jump to a new date, dropping any carried remainder."""
        self._date = date
        self._pending_ms = 0.0

    def advance(self, elapsed_real_seconds: float, timescale: float) -> CalendarDate:
        """
        Advance the date by elapsed real time scaled by timescale.

        Args:
            elapsed_real_seconds: Real time since the previous advance
            timescale: Simulated seconds per real second

        Returns:
            The new current date
        """
        pending = self._pending_ms + elapsed_real_seconds * timescale * 1000
        # Absorb float noise just below a whole millisecond
        simulated_ms = math.floor(pending + 1e-6)
        self._pending_ms = max(pending - simulated_ms, 0.0)
        date = self._date

        carry, millisecond = divmod(date.millisecond + simulated_ms, 1000)
        carry, second = divmod(date.second + carry, 60)
        carry, minute = divmod(date.minute + carry, 60)
        carry, hour = divmod(date.hour + carry, 24)

        self._date = CalendarDate(
            year=date.year,
            month=date.month,
            day=date.day + carry,
            hour=hour,
            minute=minute,
            second=second,
            millisecond=millisecond,
        )
        logger.debug(f"Clock advanced {simulated_ms} ms to {self._date.isoformat()}")
        return self._date
