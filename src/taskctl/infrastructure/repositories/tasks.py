"""SQLite-backed task store.

Implements the ``TaskStore`` port. Search and the due-date windows are
global (not scoped by owner); only :meth:`TaskRepository.get_stats` takes
an owner. Access control is the service layer's job.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime, timedelta
from typing import Any

from sqlalchemy import delete, func, insert, literal, or_, select, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.selectable import Exists, TableValuedAlias

from taskctl.domain.ids import TASK_PREFIX
from taskctl.domain.lifecycle import TaskStatus
from taskctl.domain.types import SORT_FIELDS, Priority, SortOrder
from taskctl.infrastructure.database.counters import next_sequential_id
from taskctl.infrastructure.database.schema import tasks

_WRITABLE_FIELDS = frozenset(
    {"title", "description", "owner_id", "assignee_id", "status", "priority", "due_date", "tags"}
)
_UPDATABLE_FIELDS = _WRITABLE_FIELDS - {"owner_id"}
_EQUALITY_FILTERS = frozenset({"status", "priority", "owner_id", "assignee_id"})
_PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


def _utc_now() -> datetime:
    return datetime.now(UTC)


def normalize_due_date(value: Any) -> str | None:
    """Coerce a date, datetime, or ISO string to ``YYYY-MM-DD``.

    Raises:
        ValueError: If *value* cannot be read as a date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        return datetime.fromisoformat(text).date().isoformat()


class TaskRepository:
    """Encapsulates SQL for task reads and writes."""

    def __init__(self, engine: Engine, *, clock: Callable[[], datetime] = _utc_now) -> None:
        self._engine = engine
        self._clock = clock

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a task and return the stored record.

        ``id``, ``created`` and ``modified`` are assigned here; a supplied
        ``id`` is ignored.
        """
        fields = {k: v for k, v in data.items() if k != "id"}
        _reject_unknown(fields, _WRITABLE_FIELDS)
        values = _to_columns(fields)
        if values.get("status") is None:
            values["status"] = str(TaskStatus.PENDING)
        if values.get("priority") is None:
            values["priority"] = str(Priority.MEDIUM)
        values.setdefault("tags", "[]")
        now = self._clock().isoformat()

        with self._engine.begin() as conn:
            task_id = next_sequential_id(conn, TASK_PREFIX)
            conn.execute(insert(tasks).values(id=task_id, created=now, modified=now, **values))
            record = _fetch(conn, task_id)
        assert record is not None
        return record

    def find_by_id(self, task_id: str) -> dict[str, Any] | None:
        with self._engine.connect() as conn:
            return _fetch(conn, task_id)

    def update(self, task_id: str, patch: Mapping[str, Any]) -> dict[str, Any] | None:
        """Apply *patch* and return the new record, or None if no task matched."""
        _reject_unknown(patch, _UPDATABLE_FIELDS)
        values = _to_columns(patch)
        values["modified"] = self._clock().isoformat()

        with self._engine.begin() as conn:
            result = conn.execute(update(tasks).where(tasks.c.id == task_id).values(**values))
            if result.rowcount == 0:
                return None
            return _fetch(conn, task_id)

    def delete(self, task_id: str) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(delete(tasks).where(tasks.c.id == task_id))
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def filter(self, criteria: Mapping[str, Any]) -> list[dict[str, Any]]:
        """List tasks matching every criterion.

        Supported keys: ``status``, ``priority``, ``owner_id``,
        ``assignee_id`` (equality), ``tag`` (membership), ``due_before`` /
        ``due_after`` (inclusive dates). None values are ignored.
        """
        stmt = select(tasks)
        for key, value in criteria.items():
            if value is None:
                continue
            if key in _EQUALITY_FILTERS:
                stmt = stmt.where(tasks.c[key] == str(value))
            elif key == "tag":
                tag = _tag_elements()
                stmt = stmt.where(_any_tag(tag, tag.c.value == str(value)))
            elif key == "due_before":
                stmt = stmt.where(tasks.c.due_date <= normalize_due_date(value))
            elif key == "due_after":
                stmt = stmt.where(tasks.c.due_date >= normalize_due_date(value))
            else:
                msg = f"Unknown filter field: {key!r}"
                raise ValueError(msg)
        return self._rows(stmt.order_by(tasks.c.modified.desc(), tasks.c.id.desc()))

    def search(self, query: str) -> list[dict[str, Any]]:
        """Case-insensitive substring search over title, description, and each tag."""
        pattern = _like_pattern(query.strip())
        tag = _tag_elements()
        stmt = (
            select(tasks)
            .where(
                or_(
                    tasks.c.title.ilike(pattern, escape="\\"),
                    tasks.c.description.ilike(pattern, escape="\\"),
                    _any_tag(tag, tag.c.value.ilike(pattern, escape="\\")),
                )
            )
            .order_by(tasks.c.modified.desc(), tasks.c.id.desc())
        )
        return self._rows(stmt)

    def find_overdue(self) -> list[dict[str, Any]]:
        today = self._today()
        stmt = (
            select(tasks)
            .where(tasks.c.due_date < today.isoformat(), _unfinished())
            .order_by(tasks.c.due_date, tasks.c.id)
        )
        return self._rows(stmt)

    def find_due_soon(self, days: int) -> list[dict[str, Any]]:
        """Unfinished tasks due between today and today + *days*, inclusive."""
        today = self._today()
        horizon = today + timedelta(days=days)
        stmt = (
            select(tasks)
            .where(
                tasks.c.due_date >= today.isoformat(),
                tasks.c.due_date <= horizon.isoformat(),
                _unfinished(),
            )
            .order_by(tasks.c.due_date, tasks.c.id)
        )
        return self._rows(stmt)

    def get_stats(self, owner_id: str) -> dict[str, Any]:
        """Per-status counts, overdue count, and completion rate for *owner_id*."""
        by_status = (
            select(tasks.c.status, func.count(tasks.c.id).label("n"))
            .where(tasks.c.owner_id == owner_id)
            .group_by(tasks.c.status)
        )
        overdue = select(func.count(tasks.c.id)).where(
            tasks.c.owner_id == owner_id,
            tasks.c.due_date < self._today().isoformat(),
            _unfinished(),
        )
        with self._engine.connect() as conn:
            counts = {str(row.status): int(row.n) for row in conn.execute(by_status)}
            overdue_count = int(conn.execute(overdue).scalar_one())

        total = sum(counts.values())
        completed = counts.get(TaskStatus.COMPLETED, 0)
        return {
            "total": total,
            "pending": counts.get(TaskStatus.PENDING, 0),
            "in_progress": counts.get(TaskStatus.IN_PROGRESS, 0),
            "completed": completed,
            "blocked": counts.get(TaskStatus.BLOCKED, 0),
            "overdue": overdue_count,
            "completion_rate": round(completed / total, 2) if total else 0.0,
        }

    def sort(self, task_list: list[dict[str, Any]], field: str, order: str) -> list[dict[str, Any]]:
        """Sort records in Python; records missing *field* always come last."""
        if field not in SORT_FIELDS:
            msg = f"Cannot sort by {field!r}. Expected one of {sorted(SORT_FIELDS)}"
            raise ValueError(msg)
        if order not in (SortOrder.ASC, SortOrder.DESC):
            msg = f"Unknown sort order: {order!r}"
            raise ValueError(msg)

        present = [t for t in task_list if t.get(field) is not None]
        missing = [t for t in task_list if t.get(field) is None]

        def key(task: dict[str, Any]) -> Any:
            value = task[field]
            if field == "priority":
                return _PRIORITY_RANK.get(value, -1)
            if field == "title":
                return str(value).casefold()
            return str(value)

        present.sort(key=key, reverse=order == SortOrder.DESC)
        return present + missing

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _today(self) -> date:
        return self._clock().date()

    def _rows(self, stmt: Any) -> list[dict[str, Any]]:
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_to_record(row) for row in rows]


def _unfinished() -> ColumnElement[bool]:
    return tasks.c.status != str(TaskStatus.COMPLETED)


def _tag_elements() -> TableValuedAlias:
    """One row per element of the ``tags`` JSON array, exposed as ``value``."""
    return func.json_each(tasks.c.tags).table_valued("value").alias("tag")


def _any_tag(tag: TableValuedAlias, condition: ColumnElement[bool]) -> Exists:
    """True when some element of *tag* satisfies *condition*."""
    return select(literal(1)).select_from(tag).where(condition).correlate(tasks).exists()


def _reject_unknown(fields: Mapping[str, Any], allowed: frozenset[str]) -> None:
    unknown = sorted(set(fields) - allowed)
    if unknown:
        msg = f"Unknown task field(s): {', '.join(unknown)}"
        raise ValueError(msg)


def _to_columns(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Convert record fields to column values, validating enumerated fields."""
    values = dict(fields)
    if values.get("status") is not None:
        status = str(values["status"])
        if status not in {s.value for s in TaskStatus}:
            msg = f"Unknown task status: {status!r}"
            raise ValueError(msg)
        values["status"] = status
    if "priority" in values and values["priority"] is not None:
        priority = str(values["priority"])
        if priority not in {p.value for p in Priority}:
            msg = f"Unknown task priority: {priority!r}"
            raise ValueError(msg)
        values["priority"] = priority
    if "due_date" in values:
        values["due_date"] = normalize_due_date(values["due_date"])
    if "tags" in values:
        tags = values["tags"] or []
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(",") if t.strip()]
        values["tags"] = json.dumps([str(t) for t in tags], ensure_ascii=False)
    return values


def _to_record(row: Mapping[str, Any]) -> dict[str, Any]:
    record = dict(row)
    record["tags"] = json.loads(record["tags"]) if record.get("tags") else []
    return record


def _fetch(conn: Connection, task_id: str) -> dict[str, Any] | None:
    row = conn.execute(select(tasks).where(tasks.c.id == task_id)).mappings().first()
    return _to_record(row) if row is not None else None


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
