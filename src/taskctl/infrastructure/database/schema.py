"""SQLAlchemy Core table definitions for the taskctl database."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, MetaData, Table, Text

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("email", Text),
    Column("created", Text, nullable=False),
)

tasks = Table(
    "tasks",
    metadata,
    Column("id", Text, primary_key=True),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("owner_id", Text, ForeignKey("users.id"), nullable=False),
    Column("assignee_id", Text, ForeignKey("users.id")),
    Column("status", Text, nullable=False, default="pending", server_default="pending"),
    Column("priority", Text, nullable=False, default="medium", server_default="medium"),
    Column("due_date", Text),  # YYYY-MM-DD
    Column("tags", Text),  # JSON array
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

Index("ix_tasks_owner", tasks.c.owner_id)
Index("ix_tasks_status", tasks.c.status)
Index("ix_tasks_due_date", tasks.c.due_date)

id_counters = Table(
    "id_counters",
    metadata,
    Column("type_prefix", Text, primary_key=True),
    Column("next_value", Integer, nullable=False, default=1, server_default="1"),
)
