"""fishing-journal: log fishing contests and browse your statistics."""

__version__ = "0.1.0"
