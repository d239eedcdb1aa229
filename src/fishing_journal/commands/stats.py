"""Contest statistics command."""

import click

from ..db import ContestRepository, get_db_path
from ..services.stats import summarize
from .base import async_command, echo_info, ensure_initialized


@click.command()
@click.pass_context
@async_command
async def stats(ctx):
    """Show average weight, favorite location and win rate."""
    ensure_initialized(ctx)

    contests = await ContestRepository(get_db_path()).list_all()
    summary = summarize(contests)

    if summary is None:
        echo_info("Record a first contest to see statistics: fishing-journal add")
        return

    click.echo()
    click.echo(f"Average weight:     {summary.average_weight:.1f} g")
    click.echo(f"Favorite location:  {summary.favorite_location}")
    click.echo(f"Win rate:           {summary.win_rate} %")
    click.echo()
    click.echo(f"Based on {len(contests)} contest(s)")
