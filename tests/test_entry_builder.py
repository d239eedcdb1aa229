"""Tests for the entry builder."""

import asyncio
from datetime import date

import aiosqlite
import pytest

from fishing_journal.models.contest import CatchType, WaterCharacteristic, WeatherCondition
from fishing_journal.services.entry_builder import (
    SAVE_ERROR_MESSAGE,
    UNSET,
    ContestDraft,
    ContestSaveError,
    EntryBuilder,
    LineDraft,
)
from fishing_journal.services.weather import WeatherLookup, estimate

TODAY = date(2024, 5, 1)


class FailingRepository:
    """Repository whose writes always fail."""

    def __init__(self):
        self.attempts = 0

    async def append(self, entry):
        self.attempts += 1
        raise aiosqlite.OperationalError("unable to open database file")


@pytest.fixture
def builder(repository):
    return EntryBuilder(repository, today=lambda: TODAY, weather_lookup=WeatherLookup(delay=0))


class TestDraftEditing:
    """Tests for draft field and line operations."""

    def test_fresh_draft(self, builder):
        draft = builder.draft

        assert draft.date == "2024-05-01"
        assert draft.location == ""
        assert draft.total_weight == 0
        assert draft.water_characteristic == WaterCharacteristic.BOUEUSE.value
        assert len(draft.lines) == 1
        assert draft.lines[0].float_size == UNSET

    def test_set_field(self, builder):
        builder.set_field("location", "Messancy")
        builder.set_field("catches", ("Gardons", "Brèmes"))

        assert builder.draft.location == "Messancy"
        assert builder.draft.catches == ["Gardons", "Brèmes"]

    def test_set_choice_from_single_string(self, builder):
        builder.set_field("catches", "Carpes")
        builder.set_field("hook_baits", "")

        assert builder.draft.catches == ["Carpes"]
        assert builder.draft.hook_baits == []

    def test_set_unknown_field(self, builder):
        with pytest.raises(ValueError):
            builder.set_field("created_at", "2024-05-01")
        with pytest.raises(ValueError):
            builder.set_field("lines", [])

    def test_add_line_ids_unique(self, builder):
        first = builder.draft.lines[0].id
        second = builder.add_line()
        third = builder.add_line()

        assert len({first, second, third}) == 3
        assert [line.id for line in builder.draft.lines] == [first, second, third]

    def test_line_id_stable_across_edits(self, builder):
        line_id = builder.add_line()
        builder.set_line_field(line_id, "hook", "n°16")
        builder.set_line_field(line_id, "float_size", 2)

        assert builder.draft.lines[1].id == line_id
        assert builder.draft.lines[1].hook == "n°16"

    def test_set_line_field_unknown_line(self, builder):
        with pytest.raises(KeyError):
            builder.set_line_field("missing", "hook", "n°16")

    def test_remove_line(self, builder):
        first = builder.draft.lines[0].id
        second = builder.add_line()
        builder.remove_line(first)

        assert [line.id for line in builder.draft.lines] == [second]

    def test_remove_last_line_is_noop(self, builder):
        only = builder.draft.lines[0].id
        builder.remove_line(only)
        builder.remove_line("missing")

        assert [line.id for line in builder.draft.lines] == [only]

    def test_reset(self, builder):
        builder.set_field("location", "Virton")
        builder.add_line()
        builder.reset()

        assert builder.draft.location == ""
        assert len(builder.draft.lines) == 1


class TestBuildEntry:
    """Tests for submit-time normalization."""

    def test_numeric_coercion(self, builder):
        builder.set_field("total_weight", "3000")
        builder.set_field("temperature", "")
        line_id = builder.draft.lines[0].id
        builder.set_line_field(line_id, "float_size", "1.5")
        builder.set_line_field(line_id, "main_line", 0)
        builder.set_line_field(line_id, "length_meters", UNSET)

        entry = builder.build_entry()

        assert entry.total_weight == 3000
        assert entry.temperature is None
        assert entry.lines[0].float_size == 1.5
        assert entry.lines[0].main_line == 0
        assert entry.lines[0].length_meters is None
        assert "length_meters" not in entry.lines[0].to_dict()

    def test_unparseable_weight_defaults_to_zero(self, builder):
        builder.set_field("total_weight", "beaucoup")
        assert builder.build_entry().total_weight == 0

    def test_temperature_number(self, builder):
        builder.set_field("temperature", "18")
        assert builder.build_entry().temperature == 18

    def test_choices_parsed_and_deduplicated(self, builder):
        builder.set_field("weather_conditions", ["Pluie", "Pluie", "Vent"])
        builder.set_field("catches", ["Carpes"])

        entry = builder.build_entry()

        assert entry.weather_conditions == [WeatherCondition.PLUIE, WeatherCondition.VENT]
        assert entry.catches == [CatchType.CARPES]

    def test_draft_untouched(self, builder):
        builder.set_field("total_weight", "3000")
        builder.build_entry()
        assert builder.draft.total_weight == "3000"


class TestSubmit:
    """Tests for submit."""

    def test_success_resets_and_notifies(self, repository):
        saved = []
        builder = EntryBuilder(repository, on_saved=saved.append, today=lambda: TODAY)
        builder.set_field("location", "Messancy")
        builder.set_field("total_weight", "3000")

        stored = asyncio.run(builder.submit())

        assert stored.id is not None
        assert stored.created_at is not None
        assert saved == [stored]
        assert builder.draft.location == ""
        assert builder.draft.total_weight == 0

        contests = asyncio.run(repository.list_all())
        assert len(contests) == 1
        assert contests[0].total_weight == 3000

    def test_async_callback(self, repository):
        saved = []

        async def on_saved(entry):
            saved.append(entry.id)

        builder = EntryBuilder(repository, on_saved=on_saved, today=lambda: TODAY)
        stored = asyncio.run(builder.submit())

        assert saved == [stored.id]

    def test_failing_listener_still_resets_draft(self, repository):
        def broken(snapshot):
            if snapshot:
                raise RuntimeError("listener broke")

        builder = EntryBuilder(repository, today=lambda: TODAY)
        builder.set_field("location", "Messancy")

        async def scenario():
            await repository.subscribe(broken)
            return await builder.submit()

        stored = asyncio.run(scenario())

        assert stored.location == "Messancy"
        assert builder.draft.location == ""
        assert len(asyncio.run(repository.list_all())) == 1

    def test_failure_keeps_draft(self):
        repo = FailingRepository()
        saved = []
        builder = EntryBuilder(repo, on_saved=saved.append, today=lambda: TODAY)
        builder.set_field("location", "Messancy")
        line_id = builder.add_line()

        with pytest.raises(ContestSaveError) as exc_info:
            asyncio.run(builder.submit())

        assert exc_info.value.message == SAVE_ERROR_MESSAGE
        assert builder.draft.location == "Messancy"
        assert builder.draft.lines[1].id == line_id
        assert saved == []

        with pytest.raises(ContestSaveError):
            asyncio.run(builder.submit())
        assert repo.attempts == 2


class TestWeather:
    """Tests for the builder's weather lookup."""

    def test_blank_location_gives_nothing(self, builder):
        builder.set_field("location", "   ")
        assert asyncio.run(builder.refresh_weather()) is None
        assert builder.weather is None

    def test_lookup_uses_trimmed_location(self, builder):
        builder.set_field("location", "  Messancy sous la pluie ")
        snapshot = asyncio.run(builder.refresh_weather())

        assert snapshot == estimate("Messancy sous la pluie", "2024-05-01")
        assert builder.weather == snapshot

    def test_input_change_discards_result(self, repository):
        builder = EntryBuilder(repository, today=lambda: TODAY, weather_lookup=WeatherLookup(delay=0.01))
        builder.set_field("location", "Virton")

        async def scenario():
            task = asyncio.create_task(builder.refresh_weather())
            await asyncio.sleep(0)
            builder.set_field("location", "Arlon")
            return await task

        assert asyncio.run(scenario()) is None
        assert builder.weather is None

    def test_apply_weather(self, builder):
        builder.set_field("location", "Messancy sous la pluie")
        snapshot = asyncio.run(builder.refresh_weather())
        builder.apply_weather()

        assert builder.draft.temperature == snapshot.temperature
        assert builder.draft.weather_conditions == ["Pluie"]

        builder.apply_weather()
        assert builder.draft.weather_conditions == ["Pluie"]

    def test_apply_snow_keeps_conditions(self, builder):
        builder.set_field("location", "Canal sous la neige")
        asyncio.run(builder.refresh_weather())
        builder.apply_weather()

        assert builder.draft.weather_conditions == []


class TestContestDraftFromDict:
    """Tests for building drafts from submitted data."""

    def test_defaults_and_lines(self):
        draft = ContestDraft.from_dict(
            {
                "location": "Arlon",
                "catches": "Carpes",
                "lines": [{"id": "x", "float_size": ""}, "junk"],
            },
            TODAY,
        )

        assert draft.date == "2024-05-01"
        assert draft.location == "Arlon"
        assert draft.catches == ["Carpes"]
        assert len(draft.lines) == 1
        assert draft.lines[0].id == "x"
        assert draft.lines[0].float_size == UNSET

    def test_no_lines_keeps_one(self):
        draft = ContestDraft.from_dict({"lines": []}, TODAY)
        assert len(draft.lines) == 1

    def test_repeated_line_ids_replaced(self):
        draft = ContestDraft.from_dict(
            {"lines": [{"id": "a", "hook": "n°18"}, {"id": "a", "hook": "n°20"}, {"id": ""}]},
            TODAY,
        )

        ids = [line.id for line in draft.lines]
        assert ids[0] == "a"
        assert len(set(ids)) == 3
        assert all(ids)
        assert [line.hook for line in draft.lines] == ["n°18", "n°20", ""]

    def test_load_gives_unique_line_ids(self, builder):
        draft = ContestDraft.empty(TODAY)
        draft.lines = [LineDraft(id="a"), LineDraft(id="a")]
        builder.load(draft)

        ids = [line.id for line in builder.draft.lines]
        assert len(set(ids)) == 2
