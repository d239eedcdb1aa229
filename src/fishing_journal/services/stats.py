"""Summary statistics over recorded contests."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..models.contest import ContestEntry

WIN_MARKER = "gagn"  # matches "Gagné", "gagnant", "Gagné de secteur"...
NO_LOCATION = "—"


@dataclass(frozen=True)
class ContestStats:
    """Aggregate figures shown on the dashboard."""

    average_weight: float  # grams
    favorite_location: str
    win_rate: int  # percent, 0-100

    def to_dict(self) -> dict:
        return {
            "average_weight": self.average_weight,
            "favorite_location": self.favorite_location,
            "win_rate": self.win_rate,
        }


def is_win(entry: ContestEntry) -> bool:
    """Whether the free-text ranking reads as a win."""
    return WIN_MARKER in entry.ranking.lower()


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def favorite_location(entries: Sequence[ContestEntry]) -> str:
    """Most frequent non-empty location; ties go to the first one seen."""
    counts: dict[str, int] = {}
    for entry in entries:
        if not entry.location:
            continue
        counts[entry.location] = counts.get(entry.location, 0) + 1

    best = NO_LOCATION
    best_count = 0
    for location, count in counts.items():
        if count > best_count:
            best, best_count = location, count
    return best


def summarize(entries: Sequence[ContestEntry]) -> ContestStats | None:
    """Compute dashboard statistics.

    Args:
        entries: Contests in repository delivery order

    Returns:
        ContestStats, or None when there are no contests yet
    """
    if not entries:
        return None

    count = len(entries)
    total_weight = sum(entry.total_weight for entry in entries)
    wins = sum(1 for entry in entries if is_win(entry))

    return ContestStats(
        average_weight=total_weight / count,
        favorite_location=favorite_location(entries),
        win_rate=round_half_up(wins / count * 100),
    )
