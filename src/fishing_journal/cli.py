"""CLI entry point for fishing-journal."""

import click

from . import __version__
from .commands import add, contests, init, serve, stats, weather
from .config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="fishing-journal")
@click.option("--log-level", default=None, help="Logging level (default: from settings)")
def main(log_level: str | None):
    """fishing-journal: Fishing Contest Journal.

    Record your contests, line setups and bait strategies, then browse
    your results and statistics.

    Example usage:

        # Initialize the journal
        fishing-journal init

        # Record a contest
        fishing-journal add

        # Browse contests
        fishing-journal contests list --location Messancy
        fishing-journal contests show 1

        # Statistics and simulated weather
        fishing-journal stats
        fishing-journal weather "Messancy" 2024-05-01
    """
    configure_logging(log_level)


# Register commands
main.add_command(init)
main.add_command(add)
main.add_command(contests)
main.add_command(stats)
main.add_command(weather)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
