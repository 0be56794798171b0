"""SQLite backing file for session storage, plus its schema migrations."""

import importlib
import logging
import pkgutil
import re
import sqlite3
from pathlib import Path

from tripweather.storage import migrations

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"
BUSY_TIMEOUT_MS = 5000
MIGRATION_NAME = re.compile(r"^v\d{3}_\w+$")


def connect(db_path: str | Path, busy_timeout_ms: int = BUSY_TIMEOUT_MS) -> sqlite3.Connection:
    """Open the session database.

    File databases get their parent directory created and run in WAL mode
    with ``synchronous=NORMAL``. Concurrent writers wait up to
    ``busy_timeout_ms`` for the lock.
    """
    if str(db_path) != MEMORY_DB:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
    if str(db_path) != MEMORY_DB:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA synchronous=NORMAL")
    return conn


def run_migrations(conn: sqlite3.Connection) -> list[str]:
    """Apply pending migrations in name order.

    Each migration is recorded in ``schema_versions`` with the first line of
    its docstring. Returns the names applied by this call.
    """
    with conn:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_versions ("
            "  version TEXT PRIMARY KEY,"
            "  description TEXT NOT NULL DEFAULT '',"
            "  applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP"
            ")"
        )
    applied = {row["version"] for row in conn.execute("SELECT version FROM schema_versions")}

    newly_applied = []
    for name in available_migrations():
        if name in applied:
            continue
        module = importlib.import_module(f"{migrations.__name__}.{name}")
        doc = (module.__doc__ or "").strip()
        with conn:
            module.up(conn)
            conn.execute(
                "INSERT INTO schema_versions (version, description) VALUES (?, ?)",
                (name, doc.splitlines()[0] if doc else ""),
            )
        logger.info("Applied session storage migration %s", name)
        newly_applied.append(name)

    return newly_applied


def available_migrations() -> list[str]:
    """Migration modules shipped in ``tripweather.storage.migrations``."""
    return sorted(
        info.name
        for info in pkgutil.iter_modules(migrations.__path__)
        if MIGRATION_NAME.match(info.name)
    )
