"""Data models for fishing-journal."""

from .contest import (
    CatchType,
    ContestEntry,
    HookBait,
    LineSetup,
    WaterCharacteristic,
    WeatherCondition,
)
from .weather import WeatherSnapshot

__all__ = [
    "CatchType",
    "ContestEntry",
    "HookBait",
    "LineSetup",
    "WaterCharacteristic",
    "WeatherCondition",
    "WeatherSnapshot",
]
