"""
Activity persistence: the ActivityStore interface and its two backends.

SqliteActivityStore opens one scoped connection per operation through
db.get_conn(); InMemoryActivityStore keeps rows in a dict and is meant for
tests and demos. Handlers only see the ActivityStore protocol.
"""
from __future__ import annotations

import logging
import sqlite3
import threading
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Protocol

from ..db import get_conn
from ..errors import StoreError
from ..repository import activity_repo

logger = logging.getLogger(__name__)

NOT_FOUND_REASON = "activity not found"

_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


@dataclass
class Activity:
    id: int
    name: str
    start_date: str
    duration: str

    @classmethod
    def from_row(cls, row) -> "Activity":
        return cls(
            id=int(row["id"]),
            name=row["name"],
            start_date=row["start_date"],
            duration=row["duration"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "startDate": self.start_date,
            "duration": self.duration,
        }


@dataclass
class DeleteResult:
    success: bool
    reason: Optional[str] = None


class ActivityStore(Protocol):
    def list_all(self) -> List[Activity]: ...

    def get_by_id(self, activity_id: int) -> Optional[Activity]: ...

    def create(self, name: str, start_date: str, duration: str) -> Activity: ...

    def update(self, activity_id: int, name: str, start_date: str, duration: str) -> int: ...

    def delete(self, activity_id: int) -> DeleteResult: ...

    def search_by_name(self, substring: str) -> List[Activity]: ...


class SqliteActivityStore:
    """SQLite-backed store. db_path=None resolves the path on every call."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def _fail(self, op: str, e: Exception) -> StoreError:
        logger.debug("store_failure op=%s err=%s", op, e)
        return StoreError(f"{op} failed: {e}")

    def list_all(self) -> List[Activity]:
        try:
            with get_conn(self.db_path) as conn:
                return [Activity.from_row(r) for r in activity_repo.list_all(conn)]
        except (sqlite3.Error, OSError) as e:
            raise self._fail("list_all", e) from e

    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        try:
            with get_conn(self.db_path) as conn:
                row = activity_repo.get_one(conn, activity_id)
        except (sqlite3.Error, OSError) as e:
            raise self._fail("get_by_id", e) from e
        return Activity.from_row(row) if row else None

    def create(self, name: str, start_date: str, duration: str) -> Activity:
        try:
            with get_conn(self.db_path) as conn:
                new_id = activity_repo.insert(conn, name, start_date, duration)
        except (sqlite3.Error, OSError) as e:
            raise self._fail("create", e) from e
        return Activity(id=new_id, name=name, start_date=start_date, duration=duration)

    def update(self, activity_id: int, name: str, start_date: str, duration: str) -> int:
        try:
            with get_conn(self.db_path) as conn:
                return activity_repo.update(conn, activity_id, name, start_date, duration)
        except (sqlite3.Error, OSError) as e:
            raise self._fail("update", e) from e

    def delete(self, activity_id: int) -> DeleteResult:
        try:
            with get_conn(self.db_path) as conn:
                affected = activity_repo.delete(conn, activity_id)
        except (sqlite3.Error, OSError) as e:
            raise self._fail("delete", e) from e
        if affected > 0:
            return DeleteResult(success=True)
        return DeleteResult(success=False, reason=NOT_FOUND_REASON)

    def search_by_name(self, substring: str) -> List[Activity]:
        try:
            with get_conn(self.db_path) as conn:
                return [Activity.from_row(r) for r in activity_repo.search_by_name(conn, substring)]
        except (sqlite3.Error, OSError) as e:
            raise self._fail("search_by_name", e) from e


class InMemoryActivityStore:
    """Dict-backed store with the same contract. Ids are never reused."""

    def __init__(self, seed: Optional[List[Dict[str, str]]] = None):
        self._rows: Dict[int, Activity] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        for item in seed or []:
            self.create(item["name"], item["start_date"], item["duration"])

    def list_all(self) -> List[Activity]:
        with self._lock:
            return [Activity(**asdict(a)) for _, a in sorted(self._rows.items())]

    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        with self._lock:
            a = self._rows.get(activity_id)
            return Activity(**asdict(a)) if a else None

    def create(self, name: str, start_date: str, duration: str) -> Activity:
        with self._lock:
            a = Activity(id=self._next_id, name=name, start_date=start_date, duration=duration)
            self._rows[a.id] = a
            self._next_id += 1
            return Activity(**asdict(a))

    def update(self, activity_id: int, name: str, start_date: str, duration: str) -> int:
        with self._lock:
            if activity_id not in self._rows:
                return 0
            self._rows[activity_id] = Activity(id=activity_id, name=name, start_date=start_date, duration=duration)
            return 1

    def delete(self, activity_id: int) -> DeleteResult:
        with self._lock:
            if self._rows.pop(activity_id, None) is None:
                return DeleteResult(success=False, reason=NOT_FOUND_REASON)
            return DeleteResult(success=True)

    def search_by_name(self, substring: str) -> List[Activity]:
        # SQLite's LIKE folds ASCII letters only
        needle = substring.translate(_ASCII_LOWER)
        with self._lock:
            return [
                Activity(**asdict(a))
                for _, a in sorted(self._rows.items())
                if needle in a.name.translate(_ASCII_LOWER)
            ]
