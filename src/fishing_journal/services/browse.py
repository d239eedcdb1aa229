"""Filtering, pagination and dashboard state over the contest list."""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..models.contest import ContestEntry, choice_value
from .stats import ContestStats, summarize

PAGE_SIZE = 6


@dataclass(frozen=True)
class ContestPage:
    """One page of the filtered contest list."""

    items: list[ContestEntry]
    total_pages: int
    page: int = 1
    total_items: int = 0

    def get_position_display(self) -> str:
        return f"Page {self.page} / {self.total_pages}"


def matches(
    entry: ContestEntry,
    location_filter: str | None = None,
    catch_filter: str | None = None,
) -> bool:
    """Whether a contest passes both filters. Empty filters match everything."""
    match_location = entry.location == location_filter if location_filter else True
    match_catch = catch_filter in entry.catches if catch_filter else True
    return match_location and match_catch


def filter_contests(
    entries: Iterable[ContestEntry],
    location_filter: str | None = None,
    catch_filter: str | None = None,
) -> list[ContestEntry]:
    """Keep contests matching the location AND the catch filter, in order."""
    return [entry for entry in entries if matches(entry, location_filter, catch_filter)]


def total_pages_for(count: int, page_size: int = PAGE_SIZE) -> int:
    return max(1, math.ceil(count / page_size))


def view(
    entries: Sequence[ContestEntry],
    location_filter: str | None = None,
    catch_filter: str | None = None,
    page: int = 1,
    page_size: int = PAGE_SIZE,
) -> ContestPage:
    """Filter and paginate contests.

    Pages are 1-based. Out-of-range pages are not clamped and simply come
    back empty.
    """
    if page_size < 1:
        raise ValueError(f"Invalid page size {page_size}")

    filtered = filter_contests(entries, location_filter, catch_filter)
    start = (page - 1) * page_size
    return ContestPage(
        items=filtered[start:start + page_size],
        total_pages=total_pages_for(len(filtered), page_size),
        page=page,
        total_items=len(filtered),
    )


def unique_locations(entries: Iterable[ContestEntry]) -> list[str]:
    """Distinct locations, sorted, for the location filter choices."""
    return sorted({entry.location for entry in entries})


def unique_catches(entries: Iterable[ContestEntry]) -> list[str]:
    """Distinct catch types, sorted, for the catch filter choices."""
    return sorted({choice_value(c) for entry in entries for c in entry.catches})


class Dashboard:
    """Latest contest snapshot plus the user's filter and page selection.

    Each snapshot replaces the previous one entirely.
    """

    def __init__(self, page_size: int = PAGE_SIZE):
        self.page_size = page_size
        self._contests: tuple[ContestEntry, ...] = ()
        self._location_filter = ""
        self._catch_filter = ""
        self.page = 1

    def on_snapshot(self, contests: Iterable[ContestEntry]) -> None:
        """Repository subscription callback."""
        self._contests = tuple(contests)

    @property
    def contests(self) -> tuple[ContestEntry, ...]:
        return self._contests

    @property
    def location_filter(self) -> str:
        return self._location_filter

    @location_filter.setter
    def location_filter(self, value: str | None) -> None:
        self._location_filter = value or ""
        self.page = 1

    @property
    def catch_filter(self) -> str:
        return self._catch_filter

    @catch_filter.setter
    def catch_filter(self, value: str | None) -> None:
        self._catch_filter = value or ""
        self.page = 1

    @property
    def stats(self) -> ContestStats | None:
        return summarize(self._contests)

    @property
    def locations(self) -> list[str]:
        return unique_locations(self._contests)

    @property
    def catch_types(self) -> list[str]:
        return unique_catches(self._contests)

    @property
    def total_pages(self) -> int:
        filtered = filter_contests(self._contests, self._location_filter, self._catch_filter)
        return total_pages_for(len(filtered), self.page_size)

    @property
    def current_view(self) -> ContestPage:
        return view(
            self._contests,
            self._location_filter,
            self._catch_filter,
            self.page,
            self.page_size,
        )

    def next_page(self) -> int:
        self.page = min(self.total_pages, self.page + 1)
        return self.page

    def previous_page(self) -> int:
        self.page = max(1, self.page - 1)
        return self.page

    def go_to_page(self, page: int) -> int:
        """Jump to a page, clamped to the available range."""
        self.page = min(max(1, page), self.total_pages)
        return self.page
