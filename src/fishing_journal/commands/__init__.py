"""CLI commands for fishing-journal."""

from .add import add
from .contests import contests
from .init import init
from .serve import serve
from .stats import stats
from .weather import weather

__all__ = [
    "add",
    "contests",
    "init",
    "serve",
    "stats",
    "weather",
]
