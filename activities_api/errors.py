"""Error taxonomy shared by the store and the handlers.

ValidationError -> 400, NotFoundError -> 404, StoreError -> 500.
"""
from __future__ import annotations


class ActivityError(Exception):
    pass


class ValidationError(ActivityError, ValueError):
    """Missing or malformed client input. Raised before any store access."""


class NotFoundError(ActivityError, LookupError):
    """No activity matches the requested id."""


class StoreError(ActivityError):
    """Connection or query failure in the persistence layer."""
