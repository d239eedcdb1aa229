"""Web server command."""

import click

from .base import ensure_initialized


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the web server.

    Serves the journal's JSON API (contests, statistics, simulated weather)
    on the specified host and port.

    Examples:

        # Start on default port (8000)
        fishing-journal serve

        # Start on custom port
        fishing-journal serve --port 3000

        # Development mode with auto-reload
        fishing-journal serve --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting fishing-journal web server...", fg="green"))
    click.echo()
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    app = create_app()

    uvicorn.run(
        app if not reload else "fishing_journal.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
