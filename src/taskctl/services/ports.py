"""Collaborator ports consumed by the task services.

The services depend on these Protocols instead of concrete storage so
the SQLite repositories, in-memory fakes, or a remote store can be
swapped freely. Records cross the boundary as plain dicts.
Identifiers are opaque strings or integers; services report them as
strings.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

TaskRecord = dict[str, Any]
UserRecord = dict[str, Any]


class TaskStore(Protocol):
    """CRUD and query operations over task records."""

    def create(self, data: Mapping[str, Any]) -> TaskRecord: ...

    def find_by_id(self, task_id: str) -> TaskRecord | None: ...

    def update(self, task_id: str, patch: Mapping[str, Any]) -> TaskRecord | None: ...

    def delete(self, task_id: str) -> bool: ...

    def filter(self, criteria: Mapping[str, Any]) -> list[TaskRecord]: ...

    def search(self, query: str) -> list[TaskRecord]:
        """Global text search, not scoped to any owner."""
        ...

    def find_overdue(self) -> list[TaskRecord]:
        """Global: unfinished tasks whose due date has passed."""
        ...

    def find_due_soon(self, days: int) -> list[TaskRecord]:
        """Global: unfinished tasks due within the next *days* days."""
        ...

    def get_stats(self, owner_id: str) -> dict[str, Any]:
        """Aggregate counters, already scoped to *owner_id*."""
        ...

    def sort(self, task_list: list[TaskRecord], field: str, order: str) -> list[TaskRecord]: ...


class UserStore(Protocol):
    """Lookup of user records by identifier."""

    def find_by_id(self, user_id: str) -> UserRecord | None: ...


class UserRegistry(UserStore, Protocol):
    """User store that can also register and enumerate users."""

    def create(self, name: str, email: str | None = None) -> UserRecord: ...

    def list_users(self) -> list[UserRecord]: ...
