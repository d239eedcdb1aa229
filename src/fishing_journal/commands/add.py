"""Record a contest command."""

import click

from ..db import ContestRepository, get_db_path
from ..forms import ContestForm
from ..services.entry_builder import ContestSaveError, EntryBuilder
from .base import async_command, echo_error, echo_success, ensure_initialized


@click.command()
@click.pass_context
@async_command
async def add(ctx):
    """Record a new contest interactively.

    Walks through the contest details (date, location, weight, ranking,
    water, weather, groundbait, baits, catches) and each line setup, then
    saves the contest. If saving fails you can retry without re-typing.
    """
    ensure_initialized(ctx)

    builder = EntryBuilder(ContestRepository(get_db_path()))
    await ContestForm(builder).collect()

    while True:
        try:
            stored = await builder.submit()
        except ContestSaveError as e:
            echo_error(e.message)
            if not click.confirm("Retry?", default=True):
                ctx.exit(1)
            continue
        break

    builder.close()
    echo_success(f"Contest {stored.id} saved ({stored.date}, {stored.location})")
