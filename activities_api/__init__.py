"""HTTP CRUD API over a single SQLite table of activities."""

__version__ = "1.0.0"
