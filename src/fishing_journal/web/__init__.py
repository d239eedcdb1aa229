"""Web interface for fishing-journal."""

from .app import create_app

__all__ = ["create_app"]
