"""
Host loop for the atmosphere engine.

Builds an engine from configuration and ticks it at a fixed rate until
SIGINT/SIGTERM, logging sun and season phase transitions and a periodic
status line. Rendering is up to the host: pass a surface to run_loop()
to have the overlay painted each tick.

Usage:
    atmosphere
    LATITUDE=51.5 LONGITUDE=-0.12 TIMESCALE=600 UPDATE_INTERVAL=0.5 atmosphere
"""

import signal
import threading
import time
from typing import Optional

from atmosphere.config import (
    HOST_FPS,
    LATITUDE,
    LONGITUDE,
    NIGHT_BRIGHTNESS,
    START_DATETIME,
    STATUS_LOG_INTERVAL,
    SUNRISE_DURATION,
    SUNSET_DURATION,
    TIMESCALE,
    TIMEZONE_OFFSET_DAYS,
    UPDATE_INTERVAL,
)
from atmosphere.engine import Engine, Surface
from atmosphere.logger import logger
from atmosphere.models import GeoCoordinate

shutdown_event = threading.Event()


def build_engine() -> Engine:
    """Create an engine from environment configuration."""
    return Engine(
        initial_date=START_DATETIME or None,
        update_interval=UPDATE_INTERVAL,
        timescale=TIMESCALE,
        geo=GeoCoordinate(latitude=LATITUDE, longitude=LONGITUDE),
        night_brightness=NIGHT_BRIGHTNESS,
        sunrise_duration=SUNRISE_DURATION,
        sunset_duration=SUNSET_DURATION,
        timezone_offset=TIMEZONE_OFFSET_DAYS,
    )


def run_loop(
    engine: Engine,
    stop_event: threading.Event,
    fps: int = HOST_FPS,
    surface: Optional[Surface] = None,
    status_interval: float = STATUS_LOG_INTERVAL,
    max_ticks: Optional[int] = None,
) -> int:
    """
    Tick the engine until stop_event is set.

    Args:
        engine: Engine to drive
        stop_event: Set to end the loop
        fps: Ticks per second
        surface: Optional surface painted after every tick
        status_interval: Seconds between status log lines (0 disables)
        max_ticks: Stop after this many ticks (None = run until stopped)

    Returns:
        Number of ticks performed
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")

    frame_time = 1 / fps
    sun_phase = engine.sun_phase
    season_phase = engine.season_phase
    last_status = time.monotonic()
    ticks = 0

    logger.info(f"Host loop started at {fps} fps")

    while not stop_event.is_set():
        engine.update()
        if surface is not None:
            engine.draw(surface)

        if engine.sun_phase != sun_phase:
            logger.info(f"Sun phase changed: {sun_phase} → {engine.sun_phase} at {engine.date.isoformat()}")
            sun_phase = engine.sun_phase

        if engine.season_phase != season_phase:
            logger.info(f"Season changed: {season_phase} → {engine.season_phase} at {engine.date.isoformat()}")
            season_phase = engine.season_phase

        if status_interval > 0 and time.monotonic() - last_status >= status_interval:
            last_status = time.monotonic()
            logger.info(f"Status: {engine.get_status()}")

        ticks += 1
        if max_ticks is not None and ticks >= max_ticks:
            break

        stop_event.wait(frame_time)

    logger.info(f"Host loop stopped after {ticks} ticks")
    return ticks


def shutdown_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logger.info(f"Received signal {signum}, initiating graceful shutdown")
    shutdown_event.set()


def main():
    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)
    logger.info("Registered signal handlers for graceful shutdown")

    engine = build_engine()
    run_loop(engine, shutdown_event)


if __name__ == "__main__":
    main()
