"""
Solstice and equinox search.

Each boundary is searched in a fixed four-day window (the 20th to the
23rd of March, June, September and December), evaluated at noon. The
day picked in each window is:

- vernal equinox:    smallest day length in the March window
- estival solstice:  largest day length in the June window
- autumnal equinox:  smallest day length in the September window
- hibernal solstice: smallest day length in the December window

This is a heuristic, not the astronomical definition (the equinoxes
would be the day length closest to twelve hours). It agrees with
published tables to within a few days.
"""

import math
import operator
from dataclasses import dataclass
from typing import Callable

from atmosphere.julian import CalendarDate, from_day_number, to_day_number
from atmosphere.models import GeoCoordinate
from atmosphere.solar import compute_sunriset
from atmosphere.logger import logger

# (month, first day, comparison that makes a candidate win)
SEASON_WINDOWS = {
    "vernal_equinox": (3, 20, operator.lt),
    "estival_solstice": (6, 20, operator.gt),
    "autumnal_equinox": (9, 20, operator.lt),
    "hibernal_solstice": (12, 20, operator.lt),
}
WINDOW_DAYS = 4


@dataclass(frozen=True)
class SeasonState:
    """Day numbers of the four season boundaries of one year."""

    search_year: int
    vernal_equinox: float
    estival_solstice: float
    autumnal_equinox: float
    hibernal_solstice: float

    @property
    def is_defined(self) -> bool:
        return not any(
            math.isnan(value)
            for value in (
                self.vernal_equinox,
                self.estival_solstice,
                self.autumnal_equinox,
                self.hibernal_solstice,
            )
        )

    @property
    def year(self) -> int:
        """Calendar year of the vernal equinox (the searched year while undefined)."""
        if math.isnan(self.vernal_equinox):
            return self.search_year
        return from_day_number(self.vernal_equinox).year


def _search_window(
    year: int,
    month: int,
    first_day: int,
    better: Callable[[float, float], bool],
    geo: GeoCoordinate,
    sunrise_duration: float,
    sunset_duration: float,
) -> float:
    """Return the noon day number of the winning candidate, or NaN if none won."""
    start = to_day_number(CalendarDate(year, month, first_day, 12))
    best_day = math.nan
    best_length = None

    for offset in range(WINDOW_DAYS):
        candidate = start + offset
        length = compute_sunriset(candidate, geo, sunrise_duration, sunset_duration).day_length
        # NaN lengths never win
        if math.isnan(length):
            continue
        if best_length is None or better(length, best_length):
            best_day = candidate
            best_length = length

    return best_day


def compute_seasons(
    year: int,
    geo: GeoCoordinate,
    sunrise_duration: float = 60.0,
    sunset_duration: float = 60.0,
) -> SeasonState:
    """
    Find the solstices and equinoxes of a year.

    Args:
        year: Calendar year to search
        geo: Observer coordinates
        sunrise_duration: Sunrise transition length in minutes
        sunset_duration: Sunset transition length in minutes

    Returns:
        SeasonState with noon day numbers of the four boundaries; NaN for
        a boundary whose whole window had an undefined day length
    """
    found = {
        name: _search_window(year, month, first_day, better, geo, sunrise_duration, sunset_duration)
        for name, (month, first_day, better) in SEASON_WINDOWS.items()
    }
    state = SeasonState(search_year=year, **found)

    if not state.is_defined:
        logger.warning(f"Season boundaries undefined for {year} at latitude {geo.latitude}")

    return state
