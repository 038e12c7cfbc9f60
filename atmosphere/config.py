"""
Configuration management with environment variable support.

All settings can be overridden via environment variables.
Automatically loads .env file if present.

Only the host loop reads these values; the engine receives
everything through constructor arguments and mutators.
"""

import os
from pathlib import Path
from typing import Literal
from dotenv import load_dotenv

# Load .env file from project root (one level up from atmosphere/)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Logging configuration
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = os.getenv("LOG_LEVEL", "INFO")

# Geographical coordinates (north/east positive)
LATITUDE: float = float(os.getenv("LATITUDE", "40.7789"))
LONGITUDE: float = float(os.getenv("LONGITUDE", "-73.9675"))

# Simulated clock
UPDATE_INTERVAL: float = float(os.getenv("UPDATE_INTERVAL", "60"))  # real seconds between advances
TIMESCALE: float = float(os.getenv("TIMESCALE", "1"))  # simulated seconds per real second
START_DATETIME: str = os.getenv("START_DATETIME", "")  # ISO-8601, empty = now

# Day/night transition
NIGHT_BRIGHTNESS: float = float(os.getenv("NIGHT_BRIGHTNESS", "0.65"))
SUNRISE_DURATION: float = float(os.getenv("SUNRISE_DURATION", "60"))  # minutes
SUNSET_DURATION: float = float(os.getenv("SUNSET_DURATION", "60"))  # minutes

# Fixed offset (in days) subtracted from computed sunrise/sunset
TIMEZONE_OFFSET_DAYS: float = float(os.getenv("TIMEZONE_OFFSET_DAYS", "0.125"))

# Host loop
HOST_FPS: int = int(os.getenv("HOST_FPS", "60"))
STATUS_LOG_INTERVAL: float = float(os.getenv("STATUS_LOG_INTERVAL", "10"))  # seconds, 0 = off
