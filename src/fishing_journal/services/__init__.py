"""Contest statistics, browsing, entry and weather services."""

from .browse import PAGE_SIZE, ContestPage, Dashboard, unique_catches, unique_locations, view
from .entry_builder import ContestDraft, ContestSaveError, EntryBuilder, LineDraft
from .stats import ContestStats, summarize
from .weather import WeatherLookup, estimate, fetch_historical_weather

__all__ = [
    "PAGE_SIZE",
    "ContestDraft",
    "ContestPage",
    "ContestSaveError",
    "ContestStats",
    "Dashboard",
    "EntryBuilder",
    "LineDraft",
    "WeatherLookup",
    "estimate",
    "fetch_historical_weather",
    "summarize",
    "unique_catches",
    "unique_locations",
    "view",
]
