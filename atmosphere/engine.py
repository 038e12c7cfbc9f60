"""
Day/night and season engine.

Composes the simulated clock, the solar and season ephemerides and the
phase derivation. The host calls update() once per frame and draw() to
paint the overlay; both are synchronous and bounded.

IMPORTANT:
- One engine per simulation, driven from a single thread
- Solar and season snapshots are only ever replaced wholesale
- Invalid configuration is coerced (absolute value or default), never fatal
"""

import math
import time
from datetime import datetime
from typing import Any, Callable, Optional, Protocol

from atmosphere.clock import TimeClock
from atmosphere.julian import CalendarDate, from_day_number
from atmosphere.lighting_math import clamp
from atmosphere.logger import logger
from atmosphere.models import GeoCoordinate
from atmosphere.palette import DEFAULT_PALETTE, Rgba, SkyPalette
from atmosphere.phases import (
    SeasonPhase,
    SunPhase,
    derive_brightness,
    derive_season_phase,
    derive_sky_color,
    derive_sun_phase,
)
from atmosphere.seasons import SeasonState, compute_seasons
from atmosphere.solar import (
    DEFAULT_TRANSITION_MINUTES,
    TIMEZONE_OFFSET_DAYS,
    SolarState,
    compute_sunriset,
)

DEFAULT_UPDATE_INTERVAL = 60.0  # real seconds
DEFAULT_TIMESCALE = 1.0
DEFAULT_NIGHT_BRIGHTNESS = 0.65


class Surface(Protocol):
    """Anything the overlay color can be painted onto."""

    def fill(self, color: Rgba) -> None: ...


def coerce_number(value: Any, name: str, default: float) -> float:
    """
    Turn a configuration value into a non-negative number.

    None gives the default, non-numeric values fall back to the default
    and negative values are replaced by their absolute value.
    """
    if value is None:
        return default

    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"{name} {value!r} is not a number, defaulting to {default}")
        return default

    if not math.isfinite(number):
        logger.warning(f"{name} {value!r} is not finite, defaulting to {default}")
        return default

    if number < 0:
        logger.warning(f"{name} {number} is not positive, using absolute value")
        number = abs(number)

    return number


def coerce_date(value: Any) -> CalendarDate:
    """
    Turn a start date into a CalendarDate.

    Accepts CalendarDate, datetime or an ISO-8601 string; anything else
    falls back to the current wall-clock date.
    """
    if value is None:
        return CalendarDate.now()
    if isinstance(value, CalendarDate):
        return value
    if isinstance(value, datetime):
        return CalendarDate.from_datetime(value)
    if isinstance(value, str):
        try:
            return CalendarDate.from_datetime(datetime.fromisoformat(value.strip()))
        except ValueError:
            logger.warning(f"Date {value!r} could not be parsed, defaulting to current date and time")
            return CalendarDate.now()

    logger.warning(f"Date {value!r} is not a valid date, defaulting to current date and time")
    return CalendarDate.now()


def _coerce_brightness(value: Any) -> float:
    number = coerce_number(value, "night_brightness", DEFAULT_NIGHT_BRIGHTNESS)
    brightness = clamp(number, 0.0, 1.0)
    if brightness != number:
        logger.warning(f"night_brightness {number} out of range, clamped to {brightness}")
    return brightness


def _describe(day_number: float) -> Optional[str]:
    if math.isnan(day_number):
        return None
    return from_day_number(day_number).isoformat()


class Engine:
    """
    Simulated sky state for one location.

    Recomputation schedule:
    - seasons when the current year differs from the cached seasons' year
    - sunrise/sunset once per day, at the cached next-recompute instant
    - both immediately when the coordinates or the date are changed
    """

    def __init__(
        self,
        initial_date: Any = None,
        update_interval: Any = None,
        timescale: Any = None,
        geo: Optional[GeoCoordinate] = None,
        night_brightness: float = DEFAULT_NIGHT_BRIGHTNESS,
        sunrise_duration: float = DEFAULT_TRANSITION_MINUTES,
        sunset_duration: float = DEFAULT_TRANSITION_MINUTES,
        timezone_offset: float = TIMEZONE_OFFSET_DAYS,
        palette: SkyPalette = DEFAULT_PALETTE,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the engine and compute the first solar/season snapshots.

        Args:
            initial_date: Start date (CalendarDate, datetime or ISO string); default now
            update_interval: Real seconds between clock advances (default 60)
            timescale: Simulated seconds per real second (default 1)
            geo: Observer coordinates (default New York, Central Park)
            night_brightness: Overlay alpha at night, 0.0-1.0
            sunrise_duration: Sunrise transition length in minutes
            sunset_duration: Sunset transition length in minutes
            timezone_offset: Days subtracted from sunrise/sunset
            palette: Overlay colors
            clock: Monotonic real-time source in seconds
        """
        self._real_time = clock
        self.clock = TimeClock(coerce_date(initial_date))

        self._timescale = coerce_number(timescale, "timescale", DEFAULT_TIMESCALE)
        self._update_interval = coerce_number(update_interval, "update_interval", DEFAULT_UPDATE_INTERVAL)
        self._night_brightness = _coerce_brightness(night_brightness)
        self._sunrise_duration = coerce_number(sunrise_duration, "sunrise_duration", DEFAULT_TRANSITION_MINUTES)
        self._sunset_duration = coerce_number(sunset_duration, "sunset_duration", DEFAULT_TRANSITION_MINUTES)
        self._timezone_offset = timezone_offset
        self._palette = palette
        self._geo = geo.model_copy() if geo is not None else GeoCoordinate()

        self._last_advance = self._real_time()

        self._recompute_all()

        logger.info(
            f"Engine initialized (date={self.clock.date.isoformat()}, "
            f"timescale={self._timescale}x, update_interval={self._update_interval}s, "
            f"lat={self._geo.latitude}, lng={self._geo.longitude})"
        )

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self) -> bool:
        """
        Advance simulated time if the update interval has elapsed.

        Re-derives the phases on every call.

        Returns:
            True if the clock advanced on this call
        """
        real_now = self._real_time()
        elapsed = real_now - self._last_advance
        advanced = elapsed >= self._update_interval

        if advanced:
            self._last_advance = real_now
            self.clock.advance(elapsed, self._timescale)
            self._recompute_if_due()

        self._derive()
        return advanced

    def draw(self, surface: Surface):
        """Paint the current overlay color onto surface."""
        surface.fill(self._sky_color)

    def _recompute_if_due(self):
        # Seasons first; the solar check only depends on the date
        if self.clock.date.year != self._seasons.year:
            self._recompute_seasons()
        if self.clock.day_number >= self._solar.next_recompute:
            self._recompute_solar()

    def _recompute_all(self):
        self._recompute_seasons()
        self._recompute_solar()
        self._derive()

    def _recompute_seasons(self):
        self._seasons = compute_seasons(
            self.clock.date.year, self._geo, self._sunrise_duration, self._sunset_duration
        )
        logger.info(
            f"Seasons recomputed for {self.clock.date.year}: "
            f"spring={_describe(self._seasons.vernal_equinox)}, "
            f"summer={_describe(self._seasons.estival_solstice)}, "
            f"autumn={_describe(self._seasons.autumnal_equinox)}, "
            f"winter={_describe(self._seasons.hibernal_solstice)}"
        )

    def _recompute_solar(self):
        self._solar = compute_sunriset(
            self.clock.day_number,
            self._geo,
            self._sunrise_duration,
            self._sunset_duration,
            self._timezone_offset,
        )
        logger.info(
            f"Sunriset recomputed: sunrise={_describe(self._solar.sunrise.day_number)}, "
            f"sunset={_describe(self._solar.sunset.day_number)}, "
            f"next={_describe(self._solar.next_recompute)}"
        )

    def _derive(self):
        now = self.clock.day_number
        self._sun_phase = derive_sun_phase(now, self._solar)
        self._brightness = derive_brightness(now, self._solar, self._sun_phase, self._night_brightness)
        self._sky_color = derive_sky_color(
            now, self._solar, self._sun_phase, self._night_brightness, self._palette
        )
        self._season_phase = derive_season_phase(now, self._seasons)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def sun_phase(self) -> Optional[SunPhase]:
        return self._sun_phase

    @property
    def season_phase(self) -> Optional[SeasonPhase]:
        return self._season_phase

    @property
    def brightness(self) -> float:
        return self._brightness

    @property
    def sky_color(self) -> Rgba:
        return self._sky_color

    @property
    def geo_coordinates(self) -> GeoCoordinate:
        return self._geo.model_copy()

    @property
    def update_interval(self) -> float:
        return self._update_interval

    @property
    def timescale(self) -> float:
        return self._timescale

    @property
    def night_brightness(self) -> float:
        return self._night_brightness

    @property
    def sunrise_duration(self) -> float:
        return self._sunrise_duration

    @property
    def sunset_duration(self) -> float:
        return self._sunset_duration

    @property
    def date(self) -> CalendarDate:
        return self.clock.date

    @property
    def day_number(self) -> float:
        return self.clock.day_number

    @property
    def solar(self) -> SolarState:
        return self._solar

    @property
    def seasons(self) -> SeasonState:
        return self._seasons

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_geo_coordinates(self, latitude: float, longitude: float):
        """
        Move the observer and recompute seasons and sunrise/sunset at once.

        Out-of-range values are clamped.
        """
        self._geo = GeoCoordinate(latitude=latitude, longitude=longitude)
        logger.info(f"Geographical coordinates set to lat={self._geo.latitude}, lng={self._geo.longitude}")
        self._recompute_all()

    def set_timescale(self, value: Any):
        """Set simulated seconds per real second (0 freezes the clock)."""
        self._timescale = coerce_number(value, "timescale", DEFAULT_TIMESCALE)
        logger.info(f"Timescale set to {self._timescale}x real time")

    def set_update_interval(self, seconds: Any):
        """Set real seconds between clock advances."""
        self._update_interval = coerce_number(seconds, "update_interval", DEFAULT_UPDATE_INTERVAL)
        logger.info(f"Update interval set to {self._update_interval}s")

    def set_night_brightness(self, value: Any):
        """Set the overlay alpha at night, clamped to [0, 1]."""
        self._night_brightness = _coerce_brightness(value)
        self._derive()

    def set_date_time(self, value: Any):
        """Jump the simulated clock to a new date and recompute everything."""
        self.clock.set(coerce_date(value))
        logger.info(f"Date set to {self.clock.date.isoformat()}")
        self._recompute_all()

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_status(self) -> dict[str, Any]:
        """
        Snapshot of the engine state (for debugging/logging).

        Returns:
            dict: Configuration, current date, sun and season state
        """
        now = self.clock.day_number
        return {
            "timescale": self._timescale,
            "update_interval": self._update_interval,
            "latitude": self._geo.latitude,
            "longitude": self._geo.longitude,
            "date": self.clock.date.isoformat(),
            "day_number": now,
            "sun_phase": self._sun_phase.value if self._sun_phase else None,
            "brightness": self._brightness,
            "sky_color": self._sky_color.css(),
            "sunrise": _describe(self._solar.sunrise.day_number),
            "sunrise_day_number": self._solar.sunrise.day_number,
            "sunset": _describe(self._solar.sunset.day_number),
            "sunset_day_number": self._solar.sunset.day_number,
            "next_sunriset_update": _describe(self._solar.next_recompute),
            "season_phase": self._season_phase.value if self._season_phase else None,
            "vernal_equinox": _describe(self._seasons.vernal_equinox),
            "estival_solstice": _describe(self._seasons.estival_solstice),
            "autumnal_equinox": _describe(self._seasons.autumnal_equinox),
            "hibernal_solstice": _describe(self._seasons.hibernal_solstice),
        }
