from __future__ import annotations

# activities_api/db.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator
import os

from .config import PROJECT_ROOT, read_config_yaml, is_test_env

# DB path resolution order:
# 1) env ACTIVITIES_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) fallback: activities.db at the project root
_ROOT_DB = os.path.join(PROJECT_ROOT, "activities.db")
_SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schema.sql")


def get_db_path() -> str:
    env_path = os.environ.get("ACTIVITIES_DB_PATH")
    cfg = read_config_yaml()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")

    if env_path:
        path = env_path
    elif is_test_env() and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = _ROOT_DB

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection, closed on every exit path.
    An explicit db_path wins, otherwise get_db_path() is used.
    Autocommit mode, rows come back as sqlite3.Row.
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


def read_schema() -> str:
    with open(_SCHEMA_PATH, "r", encoding="utf-8") as f:
        return f.read()


def ensure_schema(db_path: str | None = None):
    with get_conn(db_path) as conn:
        conn.executescript(read_schema())
