"""Tests for database connection, WAL mode, and migrations."""

import logging
from pathlib import Path

from tripweather.storage import session_repo
from tripweather.storage.database import available_migrations, connect, run_migrations


class TestConnect:
    def test_wal_mode(self, tmp_path: Path):
        db = connect(tmp_path / "test.db")
        mode = db.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode == "wal"
        db.close()

    def test_creates_parent_dirs(self, tmp_path: Path):
        db = connect(tmp_path / "nested" / "dir" / "test.db")
        db.close()
        assert (tmp_path / "nested" / "dir" / "test.db").exists()

    def test_row_factory(self, tmp_path: Path):
        db = connect(tmp_path / "test.db")
        db.execute("CREATE TABLE t (x TEXT)")
        db.execute("INSERT INTO t VALUES ('hello')")
        row = db.execute("SELECT x FROM t").fetchone()
        assert row["x"] == "hello"
        db.close()

    def test_busy_timeout(self, tmp_path: Path):
        db = connect(tmp_path / "test.db", busy_timeout_ms=1234)
        assert db.execute("PRAGMA busy_timeout").fetchone()[0] == 1234
        db.close()

    def test_in_memory_database(self):
        db = connect(":memory:")
        run_migrations(db)
        assert db.execute("SELECT COUNT(*) FROM session_storage").fetchone()[0] == 0
        db.close()


class TestMigrations:
    def test_creates_session_storage(self, tmp_path: Path):
        db = connect(tmp_path / "test.db")
        applied = run_migrations(db)
        assert "v001_initial" in applied

        tables = {
            row[0]
            for row in db.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
        assert {"schema_versions", "session_storage"} <= tables
        db.close()

    def test_records_description_and_logs(self, tmp_path: Path, caplog):
        db = connect(tmp_path / "test.db")
        with caplog.at_level(logging.INFO, logger="tripweather.storage.database"):
            run_migrations(db)
        row = db.execute(
            "SELECT description FROM schema_versions WHERE version = ?", ("v001_initial",)
        ).fetchone()
        assert row["description"].startswith("Initial schema")
        assert "Applied session storage migration v001_initial" in caplog.text
        db.close()

    def test_available_migrations(self):
        assert available_migrations()[0] == "v001_initial"

    def test_idempotent(self, tmp_path: Path):
        db = connect(tmp_path / "test.db")
        run_migrations(db)
        assert run_migrations(db) == []
        db.close()


class TestSessionRepo:
    def test_set_get_overwrite_remove(self, tmp_path: Path):
        db = connect(tmp_path / "test.db")
        run_migrations(db)

        assert session_repo.get_item(db, "weatherCache_current") is None
        session_repo.set_item(db, "weatherCache_current", "{}")
        session_repo.set_item(db, "weatherCache_current", '{"paris": 1}')
        assert session_repo.get_item(db, "weatherCache_current") == '{"paris": 1}'
        assert session_repo.list_keys(db) == ["weatherCache_current"]

        session_repo.remove_item(db, "weatherCache_current")
        assert session_repo.get_item(db, "weatherCache_current") is None
        db.close()
