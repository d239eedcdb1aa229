"""Database layer for fishing-journal."""

from .engine import get_db_path, init_db
from .repositories import ContestRepository

__all__ = [
    "ContestRepository",
    "get_db_path",
    "init_db",
]
