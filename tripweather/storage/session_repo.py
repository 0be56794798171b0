"""Repository for the session_storage key/value table."""

import sqlite3


def get_item(conn: sqlite3.Connection, key: str) -> str | None:
    row = conn.execute(
        "SELECT value FROM session_storage WHERE key = ?", (key,)
    ).fetchone()
    if row is None:
        return None
    return row[0]


def set_item(conn: sqlite3.Connection, key: str, value: str) -> None:
    """Insert or overwrite a value."""
    conn.execute(
        "INSERT INTO session_storage (key, value, updated_at) "
        "VALUES (?, ?, CURRENT_TIMESTAMP) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
        "updated_at = CURRENT_TIMESTAMP",
        (key, value),
    )
    conn.commit()


def remove_item(conn: sqlite3.Connection, key: str) -> None:
    conn.execute("DELETE FROM session_storage WHERE key = ?", (key,))
    conn.commit()


def list_keys(conn: sqlite3.Connection) -> list[str]:
    rows = conn.execute("SELECT key FROM session_storage ORDER BY key").fetchall()
    return [r[0] for r in rows]
