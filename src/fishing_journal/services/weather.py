"""Simulated historical weather.

There is no real weather source behind this: a reading is derived from
keywords in the location name plus a stable hash of the location and date,
so the same contest always shows the same weather.
"""

import asyncio
import logging
from dataclasses import dataclass

from ..config import settings
from ..models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherBucket:
    """Base reading for a family of weather keywords."""

    condition: str
    icon: str
    base_temp: int


DEFAULT_BUCKET = "default"

BUCKETS: dict[str, WeatherBucket] = {
    DEFAULT_BUCKET: WeatherBucket("Couvert", "☁️", 15),
    "pluie": WeatherBucket("Pluie", "🌧️", 12),
    "soleil": WeatherBucket("Soleil", "☀️", 22),
    "vent": WeatherBucket("Vent", "🌬️", 14),
    "neige": WeatherBucket("Neige", "❄️", 0),
}

# Scanned in order, first hit wins
KEYWORDS: dict[str, str] = {
    "pluie": "pluie",
    "pluieux": "pluie",
    "orage": "pluie",
    "soleil": "soleil",
    "ensoleill": "soleil",
    "vent": "vent",
    "rafale": "vent",
    "neige": "neige",
}

MIN_TEMPERATURE = -5


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def hash_string(value: str) -> int:
    """Stable polynomial hash (h * 31 + c) over UTF-16 code units.

    Wrapped to a signed 32-bit integer at each step; the absolute value is
    returned.
    """
    encoded = value.encode("utf-16-le")
    result = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        result = _to_int32((result << 5) - result + unit)
    return abs(result)


def match_bucket(location: str) -> WeatherBucket:
    """Pick the weather bucket for a location name."""
    normalized = location.lower()
    for keyword, bucket in KEYWORDS.items():
        if keyword in normalized:
            return BUCKETS[bucket]
    return BUCKETS[DEFAULT_BUCKET]


def estimate(location: str, date: str) -> WeatherSnapshot:
    """Estimate the weather at a location on a date.

    Args:
        location: Free-text place name
        date: ISO date string

    Returns:
        A deterministic WeatherSnapshot for the pair
    """
    bucket = match_bucket(location)
    jitter = hash_string(f"{location}-{date}") % 6 - 3
    return WeatherSnapshot(
        temperature=max(MIN_TEMPERATURE, bucket.base_temp + jitter),
        condition=bucket.condition,
        icon=bucket.icon,
    )


async def fetch_historical_weather(
    location: str, date: str, delay: float | None = None
) -> WeatherSnapshot:
    """Estimate the weather after a simulated lookup delay."""
    await asyncio.sleep(settings.weather_delay if delay is None else delay)
    return estimate(location, date)


class WeatherLookup:
    """Runs weather lookups and drops results that arrive too late.

    Every request takes a new generation number. When a request completes
    and a newer request or an invalidate() happened in the meantime, its
    result is discarded.
    """

    def __init__(self, delay: float | None = None):
        self.delay = delay
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self) -> None:
        """Mark every in-flight request as stale."""
        self._generation += 1

    def is_current(self, token: int) -> bool:
        return token == self._generation

    async def request(self, location: str, date: str) -> WeatherSnapshot | None:
        """Look up weather; returns None if superseded before completion."""
        self._generation += 1
        token = self._generation
        snapshot = await fetch_historical_weather(location, date, self.delay)
        if not self.is_current(token):
            logger.debug("Discarding stale weather for %r on %s", location, date)
            return None
        return snapshot
