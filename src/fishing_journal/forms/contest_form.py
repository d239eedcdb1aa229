"""Contest entry via interactive questionnaire."""

import questionary
from questionary import Style

from ..models.contest import CatchType, HookBait, WaterCharacteristic, WeatherCondition
from ..services.entry_builder import UNSET, EntryBuilder

# Custom style for questionnaire
custom_style = Style(
    [
        ("qmark", "fg:#1d6fa5 bold"),
        ("question", "bold"),
        ("answer", "fg:#2e8b57 bold"),
        ("pointer", "fg:#1d6fa5 bold"),
        ("highlighted", "fg:#1d6fa5 bold"),
        ("selected", "fg:#2e8b57"),
        ("separator", "fg:#2e8b57"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _text_default(value) -> str:
    return "" if value is None else str(value)


class ContestForm:
    """Interactive questionnaire filling an EntryBuilder draft."""

    def __init__(self, builder: EntryBuilder):
        self.builder = builder

    async def collect(self) -> None:
        """Ask for every contest field and fill the builder's draft."""
        print("\n=== Record a contest ===\n")
        builder = self.builder

        contest_date = await questionary.text(
            "Date (YYYY-MM-DD):",
            default=builder.draft.date,
            style=custom_style,
        ).ask_async()
        builder.set_field("date", (contest_date or builder.draft.date).strip())

        location = await questionary.text(
            "Location (e.g. Messancy, peg 9):",
            default=builder.draft.location,
            style=custom_style,
        ).ask_async()
        builder.set_field("location", location or "")

        await self._offer_weather()

        weight = await questionary.text(
            "Total weight (g):",
            default=_text_default(builder.draft.total_weight),
            style=custom_style,
        ).ask_async()
        builder.set_field("total_weight", weight or 0)

        ranking = await questionary.text(
            "Ranking (e.g. Gagné de secteur):",
            default=builder.draft.ranking,
            style=custom_style,
        ).ask_async()
        builder.set_field("ranking", ranking or "")

        water = await questionary.select(
            "Water:",
            choices=[w.value for w in WaterCharacteristic],
            default=builder.draft.water_characteristic,
            style=custom_style,
        ).ask_async()
        builder.set_field("water_characteristic", water or WaterCharacteristic.BOUEUSE.value)

        temperature = await questionary.text(
            "Temperature (°C, optional):",
            default=_text_default(builder.draft.temperature),
            style=custom_style,
        ).ask_async()
        builder.set_field("temperature", temperature or UNSET)

        builder.set_field(
            "weather_conditions",
            await self._checkbox("Weather conditions:", WeatherCondition, builder.draft.weather_conditions),
        )

        groundbait = await questionary.text(
            "Groundbait recipe:",
            default=builder.draft.groundbait_recipe,
            style=custom_style,
        ).ask_async()
        builder.set_field("groundbait_recipe", groundbait or "")

        strategy = await questionary.text(
            "Feeding strategy:",
            default=builder.draft.feeding_strategy,
            style=custom_style,
        ).ask_async()
        builder.set_field("feeding_strategy", strategy or "")

        builder.set_field(
            "hook_baits",
            await self._checkbox("Hook baits:", HookBait, builder.draft.hook_baits),
        )
        builder.set_field(
            "catches",
            await self._checkbox("Catches:", CatchType, builder.draft.catches),
        )

        await self._collect_lines()

    async def _offer_weather(self) -> None:
        snapshot = await self.builder.refresh_weather()
        if snapshot is None:
            return

        use_it = await questionary.confirm(
            f"Simulated weather: {snapshot.get_display()}. Use it?",
            default=True,
            style=custom_style,
        ).ask_async()
        if use_it:
            self.builder.apply_weather()

    async def _checkbox(self, message: str, enum_cls, selected: list) -> list[str]:
        answer = await questionary.checkbox(
            message,
            choices=[
                questionary.Choice(option.value, option.value, checked=option.value in selected)
                for option in enum_cls
            ],
            style=custom_style,
        ).ask_async()
        return answer or []

    async def _collect_lines(self) -> None:
        """Collect line setups, starting with the draft's first line."""
        builder = self.builder
        line_id = builder.draft.lines[0].id
        number = 1

        while True:
            print(f"\nLine {number}")
            for key, label in (
                ("float_size", "Float (g):"),
                ("main_line", "Main line (mm):"),
                ("length_meters", "Length (m):"),
            ):
                answer = await questionary.text(label, default="", style=custom_style).ask_async()
                builder.set_line_field(line_id, key, (answer or "").strip() or UNSET)

            for key, label in (
                ("hook", "Hook:"),
                ("rig_notes", "Shotting:"),
                ("remarks", "Remarks:"),
            ):
                answer = await questionary.text(label, default="", style=custom_style).ask_async()
                builder.set_line_field(line_id, key, answer or "")

            add_more = await questionary.confirm(
                "Add another line?",
                default=False,
                style=custom_style,
            ).ask_async()
            if not add_more:
                break

            line_id = builder.add_line()
            number += 1
