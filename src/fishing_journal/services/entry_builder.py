"""Draft contest assembly and submission."""

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

import aiosqlite

from ..db.repositories import ContestRepository
from ..models.contest import (
    CatchType,
    ContestEntry,
    HookBait,
    LineSetup,
    WaterCharacteristic,
    WeatherCondition,
    coerce_number,
    new_line_id,
    parse_choice,
    unique_values,
)
from ..models.weather import WeatherSnapshot
from .weather import WeatherLookup

logger = logging.getLogger(__name__)

# Numeric field cleared by the user while editing; distinct from zero
UNSET = ""

SAVE_ERROR_MESSAGE = (
    "An error occurred while saving the contest. "
    "Check your database connection."
)

HEADER_FIELDS = frozenset({
    "date",
    "location",
    "total_weight",
    "ranking",
    "water_characteristic",
    "temperature",
    "weather_conditions",
    "groundbait_recipe",
    "feeding_strategy",
    "hook_baits",
    "catches",
})
MULTI_CHOICE_FIELDS = frozenset({"weather_conditions", "hook_baits", "catches"})
LINE_FIELDS = frozenset({
    "float_size",
    "main_line",
    "length_meters",
    "hook",
    "rig_notes",
    "remarks",
})


def _as_choices(value) -> list:
    """A multi-choice value as a list. A bare string is a single choice."""
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _with_unique_ids(lines: list["LineDraft"]) -> list["LineDraft"]:
    """Give a fresh id to every line whose id is blank or already taken."""
    seen = set()
    for line in lines:
        if not line.id or line.id in seen:
            line.id = new_line_id()
        seen.add(line.id)
    return lines


class ContestSaveError(Exception):
    """A contest could not be stored. The message is meant for the user."""

    def __init__(self, message: str = SAVE_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


@dataclass
class LineDraft:
    """A line setup being edited. Measurements may be UNSET."""

    id: str = field(default_factory=new_line_id)
    float_size: float | str = UNSET
    main_line: float | str = UNSET
    length_meters: float | str = UNSET
    hook: str = ""
    rig_notes: str = ""
    remarks: str = ""

    def to_line(self) -> LineSetup:
        """Collapse UNSET measurements to absent."""
        return LineSetup(
            id=self.id,
            float_size=coerce_number(self.float_size),
            main_line=coerce_number(self.main_line),
            length_meters=coerce_number(self.length_meters),
            hook=self.hook,
            rig_notes=self.rig_notes,
            remarks=self.remarks,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "LineDraft":
        draft = cls(id=str(data.get("id") or new_line_id()))
        for key in LINE_FIELDS:
            if data.get(key) is not None:
                setattr(draft, key, data[key])
        return draft


@dataclass
class ContestDraft:
    """A contest being assembled before it is saved."""

    date: str
    location: str = ""
    total_weight: float | str = 0
    ranking: str = ""
    water_characteristic: str = WaterCharacteristic.BOUEUSE.value
    temperature: float | str | None = None
    weather_conditions: list[str] = field(default_factory=list)
    lines: list[LineDraft] = field(default_factory=lambda: [LineDraft()])
    groundbait_recipe: str = ""
    feeding_strategy: str = ""
    hook_baits: list[str] = field(default_factory=list)
    catches: list[str] = field(default_factory=list)

    @classmethod
    def empty(cls, today: date) -> "ContestDraft":
        """A fresh draft dated today with a single empty line."""
        return cls(date=today.isoformat())

    @classmethod
    def from_dict(cls, data: dict, today: date) -> "ContestDraft":
        """Create a draft from submitted form data, defaulting missing fields."""
        draft = cls.empty(today)
        for key in HEADER_FIELDS:
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if key in MULTI_CHOICE_FIELDS:
                value = _as_choices(value)
            setattr(draft, key, value)
        lines = [LineDraft.from_dict(line) for line in data.get("lines") or [] if isinstance(line, dict)]
        if lines:
            draft.lines = _with_unique_ids(lines)
        return draft


class EntryBuilder:
    """Collects one contest, normalizes it and stores it.

    Example:
        builder = EntryBuilder(repository)
        builder.set_field("location", "Messancy")
        line_id = builder.add_line()
        builder.set_line_field(line_id, "float_size", 1.5)
        stored = await builder.submit()
    """

    def __init__(
        self,
        repository: ContestRepository,
        on_saved: Callable[[ContestEntry], object] | None = None,
        today: Callable[[], date] = date.today,
        weather_lookup: WeatherLookup | None = None,
    ):
        self.repository = repository
        self.on_saved = on_saved
        self._today = today
        self._weather = weather_lookup or WeatherLookup()
        self._draft = ContestDraft.empty(today())
        self.weather: WeatherSnapshot | None = None

    @property
    def draft(self) -> ContestDraft:
        return self._draft

    def load(self, draft: ContestDraft) -> None:
        """Replace the draft with prepared data."""
        draft.lines = _with_unique_ids(draft.lines or [LineDraft()])
        self._draft = draft
        self._weather.invalidate()
        self.weather = None

    def set_field(self, key: str, value) -> None:
        """Set a contest header field."""
        if key not in HEADER_FIELDS:
            raise ValueError(f"Unknown contest field: {key}")
        if key in MULTI_CHOICE_FIELDS:
            value = _as_choices(value)
        setattr(self._draft, key, value)
        if key in ("location", "date"):
            self._weather.invalidate()

    def set_line_field(self, line_id: str, key: str, value) -> None:
        """Set a field on one line of the draft."""
        if key not in LINE_FIELDS:
            raise ValueError(f"Unknown line field: {key}")
        setattr(self._get_line(line_id), key, value)

    def add_line(self) -> str:
        """Append an empty line and return its id."""
        line = LineDraft()
        self._draft.lines.append(line)
        return line.id

    def remove_line(self, line_id: str) -> None:
        """Remove a line. The last remaining line is never removed."""
        if len(self._draft.lines) == 1:
            return
        self._draft.lines = [line for line in self._draft.lines if line.id != line_id]

    def reset(self) -> None:
        """Start over with an empty draft."""
        self._draft = ContestDraft.empty(self._today())
        self._weather.invalidate()
        self.weather = None

    def close(self) -> None:
        """Drop any weather lookup still in flight."""
        self._weather.invalidate()

    def _get_line(self, line_id: str) -> LineDraft:
        for line in self._draft.lines:
            if line.id == line_id:
                return line
        raise KeyError(f"Line {line_id} not found")

    def build_entry(self) -> ContestEntry:
        """Normalize the draft into a ContestEntry without touching the draft."""
        draft = self._draft
        temperature = None
        if draft.temperature is not None and draft.temperature != UNSET:
            temperature = coerce_number(draft.temperature)

        return ContestEntry(
            date=draft.date,
            location=draft.location,
            total_weight=coerce_number(draft.total_weight) or 0,
            ranking=draft.ranking,
            water_characteristic=parse_choice(WaterCharacteristic, draft.water_characteristic),
            temperature=temperature,
            weather_conditions=[
                parse_choice(WeatherCondition, w) for w in unique_values(draft.weather_conditions)
            ],
            lines=[line.to_line() for line in draft.lines],
            groundbait_recipe=draft.groundbait_recipe,
            feeding_strategy=draft.feeding_strategy,
            hook_baits=[parse_choice(HookBait, b) for b in unique_values(draft.hook_baits)],
            catches=[parse_choice(CatchType, c) for c in unique_values(draft.catches)],
        )

    async def submit(self) -> ContestEntry:
        """Store the draft.

        On success the draft is reset and on_saved is called with the stored
        contest. On failure the draft is kept as-is for a retry.

        Raises:
            ContestSaveError: If the repository could not store the contest
        """
        entry = self.build_entry()
        try:
            stored = await self.repository.append(entry)
        except (aiosqlite.Error, OSError) as e:
            logger.exception("Failed to save contest of %s at %s", entry.date, entry.location)
            raise ContestSaveError() from e

        self.reset()
        if self.on_saved is not None:
            result = self.on_saved(stored)
            if inspect.isawaitable(result):
                await result
        return stored

    async def refresh_weather(self) -> WeatherSnapshot | None:
        """Look up simulated weather for the draft's location and date.

        Returns None when location or date is blank, or when the draft
        changed while the lookup was running.
        """
        location = self._draft.location.strip()
        if not self._draft.date or not location:
            self.weather = None
            return None

        snapshot = await self._weather.request(location, self._draft.date)
        if snapshot is not None:
            self.weather = snapshot
        return snapshot

    def apply_weather(self) -> None:
        """Copy the looked-up weather into the draft."""
        if self.weather is None:
            return
        self._draft.temperature = self.weather.temperature
        conditions = {c.value for c in WeatherCondition}
        if self.weather.condition in conditions and self.weather.condition not in self._draft.weather_conditions:
            self._draft.weather_conditions.append(self.weather.condition)
