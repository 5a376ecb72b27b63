"""SQLite database engine, schema, and ID counters via SQLAlchemy Core."""

from taskctl.infrastructure.database.counters import next_sequential_id
from taskctl.infrastructure.database.engine import create_db_engine, init_database
from taskctl.infrastructure.database.schema import id_counters, metadata, tasks, users

__all__ = [
    "create_db_engine",
    "id_counters",
    "init_database",
    "metadata",
    "next_sequential_id",
    "tasks",
    "users",
]
