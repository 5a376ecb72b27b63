"""Typed payload contracts for service and adapter boundaries.

Store collaborators hand back plain dicts. These models validate the
shape of those records before they leave the service layer, so a store
that drops ``owner_id`` or renames ``status`` fails fast instead of
leaking a malformed payload to adapters.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


def dump_validated_list(
    model_cls: type[T], rows: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Validate every row of *rows* against *model_cls*."""
    return [dump_validated(model_cls, row) for row in rows]


class TaskItem(BaseModel):
    """One task record as returned by task operations.

    Identifiers are opaque. Stores may hand back integer ids; they are
    reported as strings.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    title: str
    owner_id: str
    assignee_id: str | None = None
    status: str
    description: str | None = None
    priority: str | None = None
    due_date: str | None = None
    tags: list[str] = Field(default_factory=list)
    created: str | None = None
    modified: str | None = None


class TaskStatsData(BaseModel):
    """Payload contract for ``TaskService.get_task_stats``."""

    model_config = ConfigDict(extra="allow")

    total: int
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    blocked: int = 0
    overdue: int = 0
    completion_rate: float = 0.0


class UserItem(BaseModel):
    """One user record."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    email: str | None = None
    created: str | None = None
