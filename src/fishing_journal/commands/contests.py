"""Contest browsing commands."""

import click

from ..config import settings
from ..db import ContestRepository, get_db_path
from ..models.contest import choice_value
from ..services.browse import Dashboard
from .base import async_command, display, echo_error, echo_info, ensure_initialized, format_table


@click.group()
@click.pass_context
def contests(ctx):
    """Browse recorded contests.

    Commands for listing contests with filters and viewing one in detail.
    """
    ensure_initialized(ctx)


@contests.command(name="list")
@click.option("--location", "-l", default="", help="Only contests at this location")
@click.option("--catch", "-c", "catch_type", default="", help="Only contests with this catch type")
@click.option("--page", "-p", default=1, type=int, help="Page number (default: 1)")
@click.pass_context
@async_command
async def list_contests(ctx, location: str, catch_type: str, page: int):
    """List contests, most recent first."""
    repo = ContestRepository(get_db_path())
    dashboard = Dashboard(page_size=settings.page_size)
    unsubscribe = await repo.subscribe(dashboard.on_snapshot)
    unsubscribe()

    if not dashboard.contests:
        echo_info("No contests found. Record one with 'fishing-journal add'")
        return

    dashboard.location_filter = location
    dashboard.catch_filter = catch_type
    dashboard.go_to_page(page)
    current = dashboard.current_view

    if not current.items:
        echo_info("No matching contests.")
        click.echo(f"Locations: {', '.join(dashboard.locations) or '—'}")
        click.echo(f"Catches:   {', '.join(dashboard.catch_types) or '—'}")
        return

    headers = ["ID", "Date", "Location", "Total weight (g)", "Ranking"]
    rows = []
    for contest in current.items:
        rows.append([
            str(contest.id),
            contest.date,
            contest.location[:30] + "..." if len(contest.location) > 30 else contest.location,
            display(contest.total_weight, "0"),
            display(contest.ranking),
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"{current.get_position_display()}  ({current.total_items} contest(s))")


@contests.command()
@click.argument("contest_id", type=int)
@click.pass_context
@async_command
async def show(ctx, contest_id: int):
    """Show details of a specific contest."""
    repo = ContestRepository(get_db_path())

    contest = await repo.get(contest_id)
    if not contest:
        echo_error(f"Contest ID {contest_id} not found")
        ctx.exit(1)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"Contest of {contest.date} (ID: {contest.id})")
    click.echo("=" * 60)
    click.echo()
    click.echo(f"Location: {contest.location}")
    click.echo(f"Total weight: {display(contest.total_weight, '0')} g")
    click.echo(f"Ranking: {contest.ranking or 'Not set'}")
    click.echo(f"Water: {display(choice_value(contest.water_characteristic))}")
    if contest.temperature is not None:
        click.echo(f"Measured temperature: {display(contest.temperature)} °C")
    if contest.weather_conditions:
        click.echo(f"Weather: {', '.join(choice_value(w) for w in contest.weather_conditions)}")
    click.echo()

    click.echo("Groundbait & strategy:")
    click.echo("-" * 40)
    click.echo(f"Groundbait: {display(contest.groundbait_recipe)}")
    click.echo(f"Feeding strategy: {display(contest.feeding_strategy)}")
    click.echo()

    click.echo("Baits & catches:")
    click.echo("-" * 40)
    click.echo(f"Hook baits: {display(', '.join(choice_value(b) for b in contest.hook_baits))}")
    click.echo(f"Catches: {display(', '.join(choice_value(c) for c in contest.catches))}")
    click.echo()

    click.echo("Lines:")
    click.echo("-" * 40)
    headers = ["#", "Float", "Main line", "Length (m)", "Hook", "Shotting", "Remarks"]
    rows = [
        [
            str(index),
            display(line.float_size),
            display(line.main_line),
            display(line.length_meters),
            display(line.hook),
            display(line.rig_notes),
            display(line.remarks),
        ]
        for index, line in enumerate(contest.lines, start=1)
    ]
    click.echo(format_table(headers, rows) or "—")
