"""SQLite-backed user store (``UserStore`` port plus seeding helpers)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from taskctl.domain.ids import USER_PREFIX
from taskctl.infrastructure.database.counters import next_sequential_id
from taskctl.infrastructure.database.schema import users


class UserRepository:
    """Encapsulates SQL for user records."""

    def __init__(
        self,
        engine: Engine,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._engine = engine
        self._clock = clock

    def create(self, name: str, email: str | None = None) -> dict[str, Any]:
        """Insert a user and return the stored record."""
        if not name.strip():
            raise ValueError("User name cannot be empty")
        with self._engine.begin() as conn:
            user_id = next_sequential_id(conn, USER_PREFIX)
            conn.execute(
                insert(users).values(
                    id=user_id,
                    name=name.strip(),
                    email=email,
                    created=self._clock().isoformat(),
                )
            )
            row = conn.execute(select(users).where(users.c.id == user_id)).mappings().one()
        return dict(row)

    def find_by_id(self, user_id: str) -> dict[str, Any] | None:
        stmt = select(users).where(users.c.id == user_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def list_users(self) -> list[dict[str, Any]]:
        with self._engine.connect() as conn:
            rows = conn.execute(select(users).order_by(users.c.id)).mappings().all()
        return [dict(row) for row in rows]
