from __future__ import annotations

from typing import Any, Optional

from ..errors import NotFoundError, ValidationError
from .activity_store import ActivityStore

SEARCH_MIN_LENGTH = 3
REQUIRED_FIELDS = ("name", "startDate", "duration")
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


def parse_activity_id(raw: Any) -> int:
    try:
        activity_id = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError("invalid id")
    # SQLite INTEGER is a signed 64-bit value
    if not SQLITE_INT_MIN <= activity_id <= SQLITE_INT_MAX:
        raise ValidationError("invalid id")
    return activity_id


def parse_limit(raw: Any) -> Optional[int]:
    """Positive integer limit, or None (no truncation) for anything else."""
    if raw is None:
        return None
    try:
        n = int(str(raw).strip())
    except ValueError:
        return None
    return n if n > 0 else None


def require_fields(data: dict) -> tuple[str, str, str]:
    missing = [k for k in REQUIRED_FIELDS if not data.get(k)]
    if missing:
        raise ValidationError("the fields 'name', 'startDate' and 'duration' are required")
    return data["name"], data["startDate"], data["duration"]


def list_activities(store: ActivityStore, name: Optional[str] = None, limit: Any = None) -> list[dict]:
    if name:
        if len(name) < SEARCH_MIN_LENGTH:
            raise ValidationError(f"search string must contain at least {SEARCH_MIN_LENGTH} characters")
        items = store.search_by_name(name)
    else:
        items = store.list_all()

    n = parse_limit(limit)
    if n is not None:
        items = items[:n]
    return [a.to_dict() for a in items]


def get_activity(store: ActivityStore, raw_id: Any) -> dict:
    activity_id = parse_activity_id(raw_id)
    a = store.get_by_id(activity_id)
    if a is None:
        raise NotFoundError("activity not found")
    return a.to_dict()


def create_activity(store: ActivityStore, data: dict) -> dict:
    name, start_date, duration = require_fields(data)
    return store.create(name, start_date, duration).to_dict()


def update_activity(store: ActivityStore, raw_id: Any, data: dict) -> dict:
    activity_id = parse_activity_id(raw_id)
    name, start_date, duration = require_fields(data)
    affected = store.update(activity_id, name, start_date, duration)
    if affected == 0:
        raise NotFoundError("activity not found for update")
    a = store.get_by_id(activity_id)
    if a is None:
        # deleted between the update and the re-read
        raise NotFoundError("activity not found for update")
    return a.to_dict()


def delete_activity(store: ActivityStore, raw_id: Any) -> None:
    activity_id = parse_activity_id(raw_id)
    res = store.delete(activity_id)
    if not res.success:
        raise NotFoundError(res.reason or "activity not found for deletion")
