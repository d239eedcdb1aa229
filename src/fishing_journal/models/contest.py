"""Contest entry data models."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4


class WaterCharacteristic(str, Enum):
    """State of the water during a contest."""

    BOUEUSE = "Boueuse"
    CLAIRE = "Claire"
    TEINTEE = "Teintée"
    COURANTE = "Courante"
    CALME = "Calme"


class WeatherCondition(str, Enum):
    """Observed weather conditions."""

    PLUIE = "Pluie"
    VENT = "Vent"
    SOLEIL = "Soleil"
    COUVERT = "Couvert"
    ORAGE = "Orage"
    BROUILLARD = "Brouillard"


class HookBait(str, Enum):
    """Baits used on the hook."""

    VASEUX = "Vaseux"
    TERREAUX = "Terreaux"
    ASTICOTS_MORTS = "Asticots morts"
    PATE = "Pâte"
    PELLETS_2MM = "Pellets 2mm"
    MAIS = "Maïs"


class CatchType(str, Enum):
    """Species caught."""

    TANCHES = "Tanches"
    CARASSINS = "Carassins"
    CARPES = "Carpes"
    GARDONS = "Gardons"
    BREMES = "Brèmes"
    PERCHES = "Perches"


def coerce_number(value) -> float | None:
    """Coerce a user-supplied value to a number.

    Returns None for None, empty strings and anything that does not parse.
    Zero is a real value and is kept.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else value
    text = str(value).strip().replace(",", ".")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_choice(enum_cls, value):
    """Return the enum member for value, or the raw string if it is not one."""
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def unique_values(values) -> list:
    """Deduplicate a multi-select value, keeping first-seen order."""
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def _as_list(value) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_text(value) -> str:
    return value if isinstance(value, str) else ""


def new_line_id() -> str:
    """Generate a line identifier."""
    return uuid4().hex


@dataclass
class LineSetup:
    """One rig configuration used during a contest."""

    id: str = field(default_factory=new_line_id)
    float_size: float | None = None  # grams
    main_line: float | None = None  # mm
    length_meters: float | None = None
    hook: str = ""
    rig_notes: str = ""
    remarks: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for storage.

        Absent measurements are left out of the document.
        """
        data = {"id": self.id}
        for key in ("float_size", "main_line", "length_meters"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        data["hook"] = self.hook
        data["rig_notes"] = self.rig_notes
        data["remarks"] = self.remarks
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "LineSetup":
        """Create from dictionary, tolerating missing fields."""
        if not isinstance(data, dict):
            data = {}
        return cls(
            id=str(data.get("id") or new_line_id()),
            float_size=coerce_number(data.get("float_size")),
            main_line=coerce_number(data.get("main_line")),
            length_meters=coerce_number(data.get("length_meters")),
            hook=_as_text(data.get("hook")),
            rig_notes=_as_text(data.get("rig_notes")),
            remarks=_as_text(data.get("remarks")),
        )


@dataclass
class ContestEntry:
    """One recorded fishing contest."""

    date: str
    location: str
    total_weight: float = 0  # grams
    ranking: str = ""
    water_characteristic: WaterCharacteristic = WaterCharacteristic.BOUEUSE
    temperature: float | None = None  # celsius
    weather_conditions: list[WeatherCondition] = field(default_factory=list)
    lines: list[LineSetup] = field(default_factory=lambda: [LineSetup()])
    groundbait_recipe: str = ""
    feeding_strategy: str = ""
    hook_baits: list[HookBait] = field(default_factory=list)
    catches: list[CatchType] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "date": self.date,
            "location": self.location,
            "total_weight": self.total_weight,
            "ranking": self.ranking,
            "water_characteristic": choice_value(self.water_characteristic),
            "temperature": self.temperature,
            "weather_conditions": [choice_value(w) for w in self.weather_conditions],
            "lines": [line.to_dict() for line in self.lines],
            "groundbait_recipe": self.groundbait_recipe,
            "feeding_strategy": self.feeding_strategy,
            "hook_baits": [choice_value(b) for b in self.hook_baits],
            "catches": [choice_value(c) for c in self.catches],
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
    ) -> "ContestEntry":
        """Create from a stored document.

        Missing or malformed fields fall back to empty values instead of
        raising, so a damaged document still shows up in listings.
        """
        water = data.get("water_characteristic")
        return cls(
            id=id,
            created_at=created_at,
            date=_as_text(data.get("date")),
            location=_as_text(data.get("location")),
            total_weight=coerce_number(data.get("total_weight")) or 0,
            ranking=_as_text(data.get("ranking")),
            water_characteristic=parse_choice(WaterCharacteristic, water) if water else "",
            temperature=coerce_number(data.get("temperature")),
            weather_conditions=[
                parse_choice(WeatherCondition, w) for w in _as_list(data.get("weather_conditions"))
            ],
            lines=[LineSetup.from_dict(line) for line in _as_list(data.get("lines"))],
            groundbait_recipe=_as_text(data.get("groundbait_recipe")),
            feeding_strategy=_as_text(data.get("feeding_strategy")),
            hook_baits=[parse_choice(HookBait, b) for b in _as_list(data.get("hook_baits"))],
            catches=[parse_choice(CatchType, c) for c in _as_list(data.get("catches"))],
        )


def choice_value(choice) -> str:
    """Plain string value of an enum member or free-text choice."""
    return choice.value if isinstance(choice, Enum) else str(choice)
