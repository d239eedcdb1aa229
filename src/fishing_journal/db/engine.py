"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite

from ..config import settings


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "fishing_journal.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Contests table; created_at is assigned by the database
        await db.execute("""
            CREATE TABLE IF NOT EXISTS contests (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                date TEXT NOT NULL,
                location TEXT DEFAULT '',
                total_weight REAL DEFAULT 0,
                ranking TEXT DEFAULT '',
                water_characteristic TEXT DEFAULT '',
                temperature REAL,
                weather_conditions TEXT DEFAULT '[]',
                lines TEXT DEFAULT '[]',
                groundbait_recipe TEXT DEFAULT '',
                feeding_strategy TEXT DEFAULT '',
                hook_baits TEXT DEFAULT '[]',
                catches TEXT DEFAULT '[]',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_contests_date
            ON contests(date)
        """)

        await db.commit()
