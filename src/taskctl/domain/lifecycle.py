"""Task status values and the auto-cycle used by status toggling.

Transitions between statuses are unrestricted when a target status is
given explicitly. Only the no-target toggle follows :data:`STATUS_CYCLE`.
"""

from __future__ import annotations

from enum import StrEnum


class TaskStatus(StrEnum):
    """Workflow status of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


STATUS_CYCLE: dict[str, str] = {
    TaskStatus.PENDING: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.PENDING,
    TaskStatus.BLOCKED: TaskStatus.PENDING,
}


def next_status(current: str | None) -> str:
    """Return the status that follows *current* in the toggle cycle.

    Unknown or missing statuses restart the cycle at ``pending``.

    Examples:
        >>> next_status("pending")
        'in-progress'
        >>> next_status("blocked")
        'pending'
        >>> next_status("archived")
        'pending'
    """
    if current is None:
        return str(TaskStatus.PENDING)
    return str(STATUS_CYCLE.get(current, TaskStatus.PENDING))
