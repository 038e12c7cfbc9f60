"""
Observable phases derived from the current day number.

Pure functions of (day number, solar/season snapshot). The engine calls
them once per tick and caches the result for that tick only.

Sun phase cycle: RISING -> RISEN -> SETTING -> SET -> RISING, gated purely
by time. After midnight (fraction >= 0.5) and before the next solar
recompute the sun is forced to SET, since that day's sunrise is not
known yet.
"""

import math
from enum import Enum
from typing import Optional

from atmosphere.lighting_math import clamp, lerp, progress
from atmosphere.palette import DEFAULT_PALETTE, Rgba, SkyPalette
from atmosphere.seasons import SeasonState
from atmosphere.solar import SolarState


class SunPhase(str, Enum):
    """Position in the day/night transition."""
    RISING = "rising"
    RISEN = "risen"
    SETTING = "setting"
    SET = "set"


class SeasonPhase(str, Enum):
    """Season between two solstice/equinox boundaries."""
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


def derive_sun_phase(now: float, solar: SolarState) -> Optional[SunPhase]:
    """
    Select the sun phase for day number `now`.

    Returns:
        SunPhase, or None when the solar state is undefined (polar latitudes)
    """
    if not solar.is_defined:
        return None

    if solar.sunrise.day_number <= now < solar.sunset.day_number:
        if now >= solar.sunrise.end:
            return SunPhase.RISEN
        return SunPhase.RISING

    if now >= solar.sunset.end or (now % 1 >= 0.5 and now < solar.next_recompute):
        return SunPhase.SET
    return SunPhase.SETTING


def _transition(now: float, solar: SolarState, phase: SunPhase) -> float:
    """Progress through the current sunrise/sunset window, limited to [0, 1]."""
    event = solar.sunrise if phase is SunPhase.RISING else solar.sunset
    return clamp(progress(now, event.day_number, event.duration), 0.0, 1.0)


def derive_brightness(
    now: float,
    solar: SolarState,
    phase: Optional[SunPhase],
    night_brightness: float,
) -> float:
    """
    Overlay darkness for the current phase.

    Falls linearly from night_brightness to 0 while rising and grows back
    while setting. NaN when the phase is undefined.
    """
    if phase is None:
        return math.nan
    if phase is SunPhase.RISEN:
        return 0.0
    if phase is SunPhase.SET:
        return night_brightness

    t = _transition(now, solar, phase)
    if phase is SunPhase.RISING:
        return lerp(night_brightness, 0.0, t)
    return lerp(0.0, night_brightness, t)


def derive_sky_color(
    now: float,
    solar: SolarState,
    phase: Optional[SunPhase],
    night_brightness: float,
    palette: SkyPalette = DEFAULT_PALETTE,
) -> Rgba:
    """
    Overlay color for the current phase.

    The sunrise tint fades in while rising and the sunset tint fades out
    while setting; alpha always equals the brightness.
    """
    brightness = derive_brightness(now, solar, phase, night_brightness)

    if phase is None or phase is SunPhase.SET:
        night = palette.night
        return Rgba(night.r, night.g, night.b, brightness)
    if phase is SunPhase.RISEN:
        return palette.day

    t = _transition(now, solar, phase)
    if phase is SunPhase.RISING:
        tint = palette.sunrise
        return Rgba(
            math.floor(tint.r * t),
            math.floor(tint.g * t),
            math.floor(tint.b * t),
            brightness,
        )
    tint = palette.sunset
    return Rgba(
        tint.r - math.floor(tint.r * t),
        tint.g - math.floor(tint.g * t),
        tint.b - math.floor(tint.b * t),
        brightness,
    )


def derive_season_phase(now: float, seasons: SeasonState) -> Optional[SeasonPhase]:
    """
    Select the season for day number `now`.

    Returns:
        SeasonPhase, or None when any boundary is undefined
    """
    if not seasons.is_defined:
        return None
    if now < seasons.vernal_equinox or now >= seasons.hibernal_solstice:
        return SeasonPhase.WINTER
    if now < seasons.estival_solstice:
        return SeasonPhase.SPRING
    if now < seasons.autumnal_equinox:
        return SeasonPhase.SUMMER
    return SeasonPhase.AUTUMN
