"""
Ambient overlay colors for each part of the day.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rgba:
    """Overlay color: 0-255 channels, alpha 0.0-1.0."""

    r: int
    g: int
    b: int
    a: float = 0.0

    def css(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a})"


@dataclass(frozen=True)
class SkyPalette:
    """
    Peak colors of the overlay.

    The night alpha is replaced by the engine's night brightness; the
    sunrise and sunset alphas are unused (the transition drives them).
    """

    day: Rgba
    night: Rgba
    sunrise: Rgba
    sunset: Rgba


DEFAULT_PALETTE = SkyPalette(
    day=Rgba(0, 0, 0, 0.0),
    night=Rgba(0, 0, 0, 0.65),
    sunrise=Rgba(182, 126, 81),
    sunset=Rgba(182, 126, 81),
)
