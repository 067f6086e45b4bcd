"""Input handling for scoring runs."""

from .validation import InputValidator

__all__ = ["InputValidator"]
