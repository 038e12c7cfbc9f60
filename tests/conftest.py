"""Shared pytest fixtures for all tests."""

import pytest

from atmosphere.engine import Engine
from atmosphere.julian import CalendarDate
from atmosphere.models import GeoCoordinate


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def tick(self, seconds: float):
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Manually advanced real-time source."""
    return FakeClock()


@pytest.fixture
def new_york():
    """Central Park, New York."""
    return GeoCoordinate(latitude=40.7789, longitude=-73.9675)


@pytest.fixture
def london():
    """Greenwich, London."""
    return GeoCoordinate(latitude=51.4769, longitude=-0.0005)


@pytest.fixture
def sydney():
    """Sydney, Australia."""
    return GeoCoordinate(latitude=-33.8688, longitude=151.2093)


@pytest.fixture
def midsummer():
    """2024-06-21 13:00 local."""
    return CalendarDate(2024, 6, 21, 13)


@pytest.fixture
def make_engine(fake_clock, new_york, midsummer):
    """
    Factory for engines driven by the fake clock.

    Defaults to New York at midsummer; any Engine argument can be overridden.
    """
    def factory(**kwargs) -> Engine:
        kwargs.setdefault("initial_date", midsummer)
        kwargs.setdefault("geo", new_york)
        kwargs.setdefault("clock", fake_clock)
        return Engine(**kwargs)

    return factory
