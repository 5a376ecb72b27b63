"""Tests for database engine setup and schema creation."""

from pathlib import Path

from sqlalchemy import inspect, select, text
from sqlalchemy.engine import Engine

from taskctl.infrastructure.database.engine import init_database
from taskctl.infrastructure.database.schema import id_counters


class TestInitDatabase:
    def test_creates_tables(self, db_engine: Engine) -> None:
        names = set(inspect(db_engine).get_table_names())
        assert {"users", "tasks", "id_counters"} <= names

    def test_task_indexes(self, db_engine: Engine) -> None:
        indexes = {ix["name"] for ix in inspect(db_engine).get_indexes("tasks")}
        assert {"ix_tasks_owner", "ix_tasks_status", "ix_tasks_due_date"} <= indexes

    def test_seeds_counters(self, db_engine: Engine) -> None:
        with db_engine.connect() as conn:
            rows = dict(conn.execute(select(id_counters.c.type_prefix, id_counters.c.next_value)))
        assert rows == {"TASK-": 1, "USER-": 1}

    def test_pragmas(self, db_engine: Engine) -> None:
        with db_engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / ".taskctl" / "taskctl.db"
        engine = init_database(db_path)
        try:
            assert db_path.parent.is_dir()
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        db_path = tmp_path / "taskctl.db"
        init_database(db_path).dispose()
        engine = init_database(db_path)
        try:
            with engine.connect() as conn:
                count = len(conn.execute(select(id_counters)).all())
            assert count == 2
        finally:
            engine.dispose()
