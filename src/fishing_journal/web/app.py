"""FastAPI application for the fishing-journal web API."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from .. import __version__
from ..db import ContestRepository, get_db_path, init_db
from ..models.contest import ContestEntry
from .routers import contests, weather


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    repository = ContestRepository(db_path or get_db_path())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize the database and follow contest snapshots."""
        await init_db(repository.db_path)

        def on_snapshot(snapshot: list[ContestEntry]) -> None:
            app.state.contests = tuple(snapshot)

        unsubscribe = await repository.subscribe(on_snapshot)
        yield
        unsubscribe()

    app = FastAPI(
        title="fishing-journal",
        description="Fishing contest journal",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.repository = repository
    app.state.contests = ()

    app.include_router(contests.router)
    app.include_router(weather.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
