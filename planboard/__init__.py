"""Markdown plan files indexed by day, month and field in SQLite, with JSON start-up configuration and a picture-of-the-day fetcher."""

__version__ = "0.1.0"