"""Initialize journal command."""

import click

from ..config import settings
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the fishing journal database.

    This creates the data directory and the SQLite database that stores
    your contests.
    """
    data_dir = settings.data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing fishing-journal in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("fishing-journal is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Record a contest:")
    click.echo("     fishing-journal add")
    click.echo()
    click.echo("  2. Browse your results:")
    click.echo("     fishing-journal contests list")
    click.echo("     fishing-journal stats")
