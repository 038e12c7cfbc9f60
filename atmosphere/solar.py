"""
Approximate sunrise and sunset computation.

Implements the sunrise equation on day numbers: mean anomaly, equation
of center, ecliptic longitude, solar transit, declination and hour
angle. Results are plain immutable snapshots; the engine swaps them
wholesale when a recompute is due.

Features:
- Sunrise/sunset day numbers shifted back by their transition duration
- Fixed timezone offset (TIMEZONE_OFFSET_DAYS) applied to both events
- A daily pre-dawn recompute instant independent of the actual sunrise

Near the poles the hour angle is undefined. The result then carries NaN
sunrise/sunset day numbers instead of raising, so the failure stays
visible in everything derived from it.
"""

import math
from dataclasses import dataclass

from atmosphere.models import GeoCoordinate
from atmosphere.logger import logger

J2000 = 2451545
OBLIQUITY = 23.45  # degrees
SUN_ALTITUDE = -0.833  # degrees, refraction + solar disc radius

# Fraction of the day number at which the next recompute happens (04:57:10)
RECOMPUTE_FRACTION = 0.7063657403923571

# Days subtracted from sunrise and sunset
TIMEZONE_OFFSET_DAYS = 0.125

DEFAULT_TRANSITION_MINUTES = 60.0


@dataclass(frozen=True)
class SolarEvent:
    """Start of a sunrise or sunset transition and its length in minutes."""

    day_number: float
    duration: float

    @property
    def end(self) -> float:
        """Day number at which the transition completes."""
        return self.day_number + self.duration / 1440


@dataclass(frozen=True)
class SolarState:
    """Sunrise and sunset for one civil day plus the next recompute instant."""

    sunrise: SolarEvent
    sunset: SolarEvent
    next_recompute: float

    @property
    def is_defined(self) -> bool:
        """False when the hour angle was undefined (polar day or night)."""
        return not (math.isnan(self.sunrise.day_number) or math.isnan(self.sunset.day_number))

    @property
    def day_length(self) -> float:
        """Days between sunrise and sunset."""
        return self.sunset.day_number - self.sunrise.day_number


def _sin(degrees: float) -> float:
    return math.sin(math.radians(degrees))


def _js_round(value: float) -> int:
    # Halves round up, not to even
    return math.floor(value + 0.5)


def next_recompute_after(day_number: float) -> float:
    """First RECOMPUTE_FRACTION instant strictly after day_number."""
    fraction = day_number % 1
    candidate = math.floor(day_number) + RECOMPUTE_FRACTION + (0 if fraction < RECOMPUTE_FRACTION else 1)
    # N + RECOMPUTE_FRACTION can round back onto day_number itself
    if candidate <= day_number:
        candidate += 1
    return candidate


def hour_angle(latitude: float, declination: float) -> float:
    """
    Hour angle of sunrise/sunset in degrees.

    Args:
        latitude: Observer latitude in degrees
        declination: Solar declination in radians

    Returns:
        Hour angle in degrees, or NaN when the sun never crosses the horizon
    """
    lat = math.radians(latitude)
    cosine = (math.sin(math.radians(SUN_ALTITUDE)) - math.sin(lat) * math.sin(declination)) / (
        math.cos(lat) * math.cos(declination)
    )
    if not -1.0 <= cosine <= 1.0:
        logger.warning(
            f"Hour angle undefined at latitude {latitude} (cos={cosine:.4f}), "
            f"sunrise/sunset will be NaN"
        )
        return math.nan
    return math.degrees(math.acos(cosine))


def compute_sunriset(
    day_number: float,
    geo: GeoCoordinate,
    sunrise_duration: float = DEFAULT_TRANSITION_MINUTES,
    sunset_duration: float = DEFAULT_TRANSITION_MINUTES,
    timezone_offset: float = TIMEZONE_OFFSET_DAYS,
) -> SolarState:
    """
    Compute sunrise and sunset for the civil day around day_number.

    Args:
        day_number: Current day number
        geo: Observer coordinates
        sunrise_duration: Sunrise transition length in minutes
        sunset_duration: Sunset transition length in minutes
        timezone_offset: Days subtracted from both events

    Returns:
        SolarState whose events start `duration` minutes before the
        computed sunrise/sunset (minus the timezone offset)
    """
    julian_cycle = _js_round((day_number - J2000 - 0.0009) + geo.longitude / 360)
    solar_noon = J2000 + 0.0009 - geo.longitude / 360 + julian_cycle
    mean_anomaly = (357.5291 + 0.98560028 * (solar_noon - J2000)) % 360
    equation_of_center = (
        1.9148 * _sin(mean_anomaly)
        + 0.0200 * _sin(2 * mean_anomaly)
        + 0.0003 * _sin(3 * mean_anomaly)
    )
    ecliptic_longitude = (mean_anomaly + 102.9372 + equation_of_center + 180) % 360
    transit_correction = 0.0053 * _sin(mean_anomaly) - 0.0069 * _sin(2 * ecliptic_longitude)
    solar_transit = solar_noon + transit_correction
    declination = math.asin(_sin(ecliptic_longitude) * _sin(OBLIQUITY))

    angle = hour_angle(geo.latitude, declination)
    julian_hour_angle = J2000 + 0.0009 + (angle - geo.longitude) / 360 + julian_cycle
    sunset = julian_hour_angle + transit_correction
    sunrise = solar_transit - (sunset - solar_transit)

    return SolarState(
        sunrise=SolarEvent(sunrise - sunrise_duration / 1440 - timezone_offset, sunrise_duration),
        sunset=SolarEvent(sunset - sunset_duration / 1440 - timezone_offset, sunset_duration),
        next_recompute=next_recompute_after(day_number),
    )
