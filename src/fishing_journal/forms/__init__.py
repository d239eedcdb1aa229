"""Interactive forms for the CLI."""

from .contest_form import ContestForm

__all__ = ["ContestForm"]
