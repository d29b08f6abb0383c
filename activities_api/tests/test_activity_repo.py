"""
Repository layer tests for activity_repo.py
"""

from activities_api.db import get_conn
from activities_api.repository import activity_repo


class TestActivityRepo:

    def setup_method(self):
        with get_conn() as conn:
            conn.execute("DELETE FROM activities")

    def test_insert_and_get_one(self):
        with get_conn() as conn:
            new_id = activity_repo.insert(conn, "foot", "2025-04-06", "1h30")
            row = activity_repo.get_one(conn, new_id)
            assert row is not None
            assert row["id"] == new_id
            assert row["name"] == "foot"
            assert row["start_date"] == "2025-04-06"
            assert row["duration"] == "1h30"

    def test_insert_is_committed(self):
        with get_conn() as conn:
            new_id = activity_repo.insert(conn, "volley", "2024-11-06", "4h")
        # autocommit: a second connection sees the row
        with get_conn() as conn:
            assert activity_repo.get_one(conn, new_id) is not None

    def test_update_and_delete_rowcount(self):
        with get_conn() as conn:
            new_id = activity_repo.insert(conn, "racing", "2025-03-06", "3h")
            assert activity_repo.update(conn, new_id, "racing", "2025-03-07", "2h") == 1
            assert activity_repo.update(conn, new_id + 99, "x", "y", "z") == 0
            assert activity_repo.get_one(conn, new_id)["duration"] == "2h"
            assert activity_repo.delete(conn, new_id) == 1
            assert activity_repo.delete(conn, new_id) == 0

    def test_list_all_ordered_by_id(self):
        with get_conn() as conn:
            ids = [activity_repo.insert(conn, n, "2025-01-01", "1h") for n in ("b", "a", "c")]
            rows = activity_repo.list_all(conn)
            assert [r["id"] for r in rows] == ids

    def test_escape_like(self):
        assert activity_repo.escape_like("50%_off\\") == "50\\%\\_off\\\\"
        assert activity_repo.escape_like("plain") == "plain"

    def test_search_by_name_is_parameterized(self):
        with get_conn() as conn:
            activity_repo.insert(conn, "foot", "2025-04-06", "1h30")
            # quote characters are data, not SQL
            rows = activity_repo.search_by_name(conn, "' OR '1'='1")
            assert rows == []
            assert len(activity_repo.search_by_name(conn, "oot")) == 1

    def test_schema_has_no_secondary_index(self):
        with get_conn() as conn:
            rows = conn.execute("PRAGMA index_list(activities)").fetchall()
            assert [r["name"] for r in rows] == []
