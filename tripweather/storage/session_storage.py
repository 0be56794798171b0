"""Session-scoped key/value storage backends for the weather cache."""

import sqlite3
from pathlib import Path
from typing import Protocol

from tripweather.storage import session_repo
from tripweather.storage.database import connect, run_migrations


class SessionStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemorySessionStorage:
    """Dict-backed storage, used when no durable store is available."""

    def __init__(self, items: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SqliteSessionStorage:
    """Storage backed by the session_storage table of a SQLite database."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @classmethod
    def open(cls, db_path: str | Path) -> "SqliteSessionStorage":
        conn = connect(db_path)
        run_migrations(conn)
        return cls(conn)

    def get_item(self, key: str) -> str | None:
        return session_repo.get_item(self.conn, key)

    def set_item(self, key: str, value: str) -> None:
        session_repo.set_item(self.conn, key, value)

    def remove_item(self, key: str) -> None:
        session_repo.remove_item(self.conn, key)

    def close(self) -> None:
        self.conn.close()
