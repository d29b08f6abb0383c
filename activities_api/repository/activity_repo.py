from __future__ import annotations

from sqlite3 import Connection

_COLUMNS = "id, name, start_date, duration"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the substring matches literally (ESCAPE '\\')."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_all(conn: Connection):
    return conn.execute(f"SELECT {_COLUMNS} FROM activities ORDER BY id").fetchall()


def get_one(conn: Connection, activity_id: int):
    return conn.execute(
        f"SELECT {_COLUMNS} FROM activities WHERE id=?", (activity_id,)
    ).fetchone()


def insert(conn: Connection, name: str, start_date: str, duration: str) -> int:
    cur = conn.execute(
        "INSERT INTO activities(name, start_date, duration) VALUES(?, ?, ?)",
        (name, start_date, duration),
    )
    return int(cur.lastrowid)


def update(conn: Connection, activity_id: int, name: str, start_date: str, duration: str) -> int:
    cur = conn.execute(
        "UPDATE activities SET name=?, start_date=?, duration=? WHERE id=?",
        (name, start_date, duration, activity_id),
    )
    return cur.rowcount


def delete(conn: Connection, activity_id: int) -> int:
    cur = conn.execute("DELETE FROM activities WHERE id=?", (activity_id,))
    return cur.rowcount


def search_by_name(conn: Connection, q: str):
    sql = f"SELECT {_COLUMNS} FROM activities WHERE name LIKE :q ESCAPE '\\' ORDER BY id"
    return conn.execute(sql, {"q": f"%{escape_like(q)}%"}).fetchall()
