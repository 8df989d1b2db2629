"""ORM models."""

from megacheck.models.winning_numbers import WinningNumbers

__all__ = ["WinningNumbers"]
