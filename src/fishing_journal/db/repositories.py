"""Data access layer for fishing-journal."""

import inspect
import json
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..models.contest import ContestEntry
from .engine import get_db_path

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[list[ContestEntry]], Awaitable[None] | None]


def _load_json_list(value) -> list:
    """Decode a JSON list column; anything unreadable becomes []."""
    if not value:
        return []
    try:
        data = json.loads(value)
    except (TypeError, ValueError):
        return []
    return data if isinstance(data, list) else []


def _parse_timestamp(value) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


class ContestRepository:
    """Append-only store of contests with snapshot subscriptions.

    Subscribers receive the full, date-ordered contest list right after
    subscribing and again after every append.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self._listeners: list[SnapshotListener] = []

    async def append(self, entry: ContestEntry) -> ContestEntry:
        """Store a new contest.

        Returns:
            The stored contest, with its database id and creation timestamp
        """
        data = entry.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO contests
                (date, location, total_weight, ranking, water_characteristic,
                 temperature, weather_conditions, lines, groundbait_recipe,
                 feeding_strategy, hook_baits, catches)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["date"],
                    data["location"],
                    data["total_weight"],
                    data["ranking"],
                    data["water_characteristic"],
                    data["temperature"],
                    json.dumps(data["weather_conditions"]),
                    json.dumps(data["lines"]),
                    data["groundbait_recipe"],
                    data["feeding_strategy"],
                    json.dumps(data["hook_baits"]),
                    json.dumps(data["catches"]),
                ),
            )
            await db.commit()
            contest_id = cursor.lastrowid

        logger.info("Stored contest %s (%s, %s)", contest_id, entry.date, entry.location)
        stored = await self.get(contest_id)
        await self._notify()
        return stored

    async def get(self, contest_id: int) -> ContestEntry | None:
        """Get a contest by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM contests WHERE id = ?", (contest_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_contest(row)

    async def list_all(self) -> list[ContestEntry]:
        """List all contests, most recent date first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM contests ORDER BY date DESC, id DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_contest(row) for row in rows]

    async def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener.

        The listener is called with the current contest list immediately,
        then after each change. Listeners may be plain or async callables.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)
        await self._deliver(listener, await self.list_all())

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self) -> None:
        """Push the new snapshot to every listener after a committed write."""
        if not self._listeners:
            return
        try:
            snapshot = await self.list_all()
        except aiosqlite.Error:
            logger.exception("Could not read contests for snapshot listeners")
            return
        for listener in list(self._listeners):
            try:
                await self._deliver(listener, snapshot)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)

    async def _deliver(self, listener: SnapshotListener, snapshot: list[ContestEntry]) -> None:
        # Each listener gets its own copy
        result = listener(list(snapshot))
        if inspect.isawaitable(result):
            await result

    def _row_to_contest(self, row: aiosqlite.Row) -> ContestEntry:
        """Convert a database row to a ContestEntry."""
        data = {
            "date": row["date"],
            "location": row["location"],
            "total_weight": row["total_weight"],
            "ranking": row["ranking"],
            "water_characteristic": row["water_characteristic"],
            "temperature": row["temperature"],
            "weather_conditions": _load_json_list(row["weather_conditions"]),
            "lines": _load_json_list(row["lines"]),
            "groundbait_recipe": row["groundbait_recipe"],
            "feeding_strategy": row["feeding_strategy"],
            "hook_baits": _load_json_list(row["hook_baits"]),
            "catches": _load_json_list(row["catches"]),
        }
        return ContestEntry.from_dict(
            data,
            id=row["id"],
            created_at=_parse_timestamp(row["created_at"]),
        )
