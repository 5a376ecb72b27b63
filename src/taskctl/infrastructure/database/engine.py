"""Database engine setup for SQLite with WAL mode.

SQLAlchemy Core (not ORM) is used because taskctl is a short-lived CLI
process and the repositories hand plain dicts across the store ports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Engine

from taskctl.domain.ids import SEQUENTIAL_PREFIXES
from taskctl.infrastructure.database.schema import id_counters, metadata


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(db_path: Path) -> Engine:
    """Initialize the taskctl database at *db_path*.

    Creates the parent directory, all tables, and seeds the
    ``id_counters`` rows. Safe to run against an existing database.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    _seed_counters(engine)
    return engine


def _seed_counters(engine: Engine) -> None:
    with engine.begin() as conn:
        for prefix in sorted(SEQUENTIAL_PREFIXES):
            row = conn.execute(
                select(id_counters.c.type_prefix).where(id_counters.c.type_prefix == prefix)
            ).first()
            if row is None:
                conn.execute(insert(id_counters).values(type_prefix=prefix, next_value=1))
