"""Simulated weather command."""

import click

from ..services.weather import fetch_historical_weather
from .base import async_command


@click.command()
@click.argument("location")
@click.argument("date")
@async_command
async def weather(location: str, date: str):
    """Show the simulated weather for LOCATION on DATE (YYYY-MM-DD).

    The reading is derived from the location name and date, so the same
    pair always gives the same weather.
    """
    snapshot = await fetch_historical_weather(location.strip(), date)
    click.echo(snapshot.get_display())
