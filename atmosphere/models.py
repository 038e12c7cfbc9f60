"""
Geographical coordinate model.

Coordinates are clamped into range on construction and on every
attribute assignment, so a stored value is never out of range.
"""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from atmosphere.lighting_math import clamp
from atmosphere.logger import logger


def _clamped(value, name: str, limit: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    clamped = clamp(number, -limit, limit)
    if clamped != number:
        logger.warning(f"{name} {number} out of range, clamped to {clamped}")
    return clamped


class GeoCoordinate(BaseModel):
    """Position on Earth in decimal degrees (north and east positive)."""

    model_config = ConfigDict(validate_assignment=True)

    latitude: float = Field(40.7789, description="North-south position, -90 to 90")
    longitude: float = Field(-73.9675, description="East-west position, -180 to 180")

    @field_validator("latitude", mode="before")
    @classmethod
    def clamp_latitude(cls, value):
        return _clamped(value, "latitude", 90.0)

    @field_validator("longitude", mode="before")
    @classmethod
    def clamp_longitude(cls, value):
        return _clamped(value, "longitude", 180.0)
