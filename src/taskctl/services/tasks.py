"""TaskService: ownership-scoped task operations.

Every public operation follows the same order:
ACTOR → VALIDATE → AUTHORIZE → DELEGATE → RESPOND

- ACTOR: an unbound controller answers ``UNAUTHENTICATED`` without
  touching any store.
- VALIDATE / AUTHORIZE: failures short-circuit before any store mutation.
- DELEGATE: the owner constraint is injected into store queries
  (list, filter) or applied to global store results (search, due-date
  windows). Stats are trusted to be pre-scoped by the store.
- RESPOND: records are validated against the payload contracts.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog

from taskctl.config.models import TasksConfig
from taskctl.domain.lifecycle import next_status
from taskctl.domain.types import ALL_STATUSES, ASSIGN_SELF, IMMUTABLE_FIELDS, is_blank
from taskctl.services.base import BaseService, service_op
from taskctl.services.contracts import (
    TaskItem,
    TaskStatsData,
    dump_validated,
    dump_validated_list,
)
from taskctl.services.result import ErrorCode, ServiceResult
from taskctl.services.session import SessionService
from taskctl.services.telemetry import traced

if TYPE_CHECKING:
    from taskctl.domain.actor import Actor
    from taskctl.services.ports import TaskRecord, TaskStore, UserStore

logger = structlog.get_logger(__name__)


class TaskService(BaseService):
    """Task access controller bound to a single actor.

    One instance serves one session. The actor is fixed at construction;
    use :meth:`as_user` to obtain a controller for another user.
    """

    def __init__(
        self,
        tasks: TaskStore,
        users: UserStore,
        actor: Actor | None = None,
        *,
        config: TasksConfig | None = None,
    ) -> None:
        super().__init__(tasks, users)
        self._actor = actor
        self._config = config or TasksConfig()

    @property
    def actor(self) -> Actor | None:
        """The acting user, or None when no user is logged in."""
        return self._actor

    def as_user(self, user_id: str | None) -> TaskService:
        """Return a controller bound to the user *user_id* resolves to.

        An unknown or blank id yields a controller with no actor.
        """
        actor = SessionService(self._users).resolve_actor(user_id)
        return TaskService(self._tasks, self._users, actor, config=self._config)

    # ------------------------------------------------------------------
    # Single-task operations
    # ------------------------------------------------------------------

    @traced
    @service_op("create_task")
    def create_task(self, data: Mapping[str, Any]) -> ServiceResult:
        """Create a task owned by the acting user.

        ``owner_id`` is always the actor's id. ``assignee_id="self"``
        resolves to the actor; any other assignee must exist.
        """
        op = "create_task"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "create a task")

        if is_blank(data.get("title")):
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, "Task title is required"
            )

        warnings: list[str] = []
        payload = dict(data)
        supplied_owner = payload.get("owner_id")
        if supplied_owner is not None and str(supplied_owner) != actor.id:
            warnings.append("Ignored owner_id: tasks are owned by their creator")
        payload["owner_id"] = actor.id

        assignee = payload.get("assignee_id")
        if assignee == ASSIGN_SELF:
            payload["assignee_id"] = actor.id
        elif assignee:
            if self._users.find_by_id(str(assignee)) is None:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, "Assignee not found", assignee_id=assignee
                )
        else:
            payload.pop("assignee_id", None)

        task = self._tasks.create(payload)
        logger.info("task.created", actor_id=actor.id, task_id=task.get("id"))

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(TaskItem, task),
            message="Task created",
            warnings=warnings,
        )

    @traced
    @service_op("get_task")
    def get_task(self, task_id: str) -> ServiceResult:
        """Fetch one task the actor owns."""
        op = "get_task"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "view tasks")

        task = self._load_owned(op, actor, task_id, "You do not have access to this task")
        if isinstance(task, ServiceResult):
            return task

        return ServiceResult(ok=True, op=op, data=dump_validated(TaskItem, task))

    @traced
    @service_op("update_task")
    def update_task(self, task_id: str, updates: Mapping[str, Any]) -> ServiceResult:
        """Apply *updates* to a task the actor owns.

        ``id``, ``owner_id`` and ``created`` are never changed; each one
        present in *updates* is dropped with a warning.
        """
        op = "update_task"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "update a task")

        task = self._load_owned(
            op, actor, task_id, "You do not have permission to update this task"
        )
        if isinstance(task, ServiceResult):
            return task

        warnings: list[str] = []
        patch: dict[str, Any] = {}
        for key, value in updates.items():
            if key in IMMUTABLE_FIELDS:
                warnings.append(f"Cannot change immutable field: {key}")
                continue
            patch[key] = value

        if "title" in patch and is_blank(patch["title"]):
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, "Task title cannot be empty"
            )

        updated = self._tasks.update(task_id, patch)
        if updated is None:
            return ServiceResult.failure(
                op, ErrorCode.OPERATION_FAILED, "Failed to update task", task_id=task_id
            )

        logger.info(
            "task.updated", actor_id=actor.id, task_id=task_id, fields=sorted(patch)
        )
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(TaskItem, updated),
            message="Task updated",
            warnings=warnings,
        )

    @traced
    @service_op("delete_task")
    def delete_task(self, task_id: str) -> ServiceResult:
        """Delete a task the actor owns."""
        op = "delete_task"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "delete a task")

        task = self._load_owned(
            op, actor, task_id, "You do not have permission to delete this task"
        )
        if isinstance(task, ServiceResult):
            return task

        if not self._tasks.delete(task_id):
            return ServiceResult.failure(
                op, ErrorCode.OPERATION_FAILED, "Failed to delete task", task_id=task_id
            )

        logger.info("task.deleted", actor_id=actor.id, task_id=task_id)
        return ServiceResult(ok=True, op=op, data={"id": task_id}, message="Task deleted")

    @traced
    @service_op("toggle_task_status")
    def toggle_task_status(self, task_id: str, status: str | None = None) -> ServiceResult:
        """Set *status*, or advance the task one step along the status cycle.

        Authorization failures from :meth:`get_task` are returned unchanged.
        """
        op = "toggle_task_status"
        if self._actor is None:
            return _unauthenticated(op, "update task status")

        current = self.get_task(task_id)
        if not current.ok:
            return current

        new_status = status or next_status(current.data.get("status"))
        result = self.update_task(task_id, {"status": new_status})
        return result.model_copy(update={"op": op})

    # ------------------------------------------------------------------
    # List operations
    # ------------------------------------------------------------------

    @traced
    @service_op("get_tasks")
    def get_tasks(
        self,
        *,
        status: str | None = None,
        search_query: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> ServiceResult:
        """List the actor's tasks.

        Args:
            status: Keep only this status; ``"all"`` disables the filter.
                Ignored when *search_query* is given.
            search_query: Text search. The store search is global, so
                results are narrowed to the actor's tasks here.
            sort_by: Field to sort on (see ``TaskStore.sort``).
            sort_order: ``"asc"`` or ``"desc"``; defaults to the configured order.
        """
        op = "get_tasks"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "view tasks")

        if not is_blank(search_query):
            tasks = [
                t for t in self._tasks.search(str(search_query).strip()) if actor.owns(t)
            ]
        else:
            criteria: dict[str, Any] = {"owner_id": actor.id}
            if status and status != ALL_STATUSES:
                criteria["status"] = status
            tasks = self._tasks.filter(criteria)

        if sort_by:
            tasks = self._tasks.sort(
                tasks, sort_by, sort_order or self._config.default_sort_order
            )

        return _list_result(op, tasks)

    @traced
    @service_op("search_tasks")
    def search_tasks(self, query: str) -> ServiceResult:
        """Text search over the actor's tasks; echoes *query* back."""
        op = "search_tasks"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "search tasks")

        if is_blank(query):
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, "Search query cannot be empty"
            )

        tasks = [t for t in self._tasks.search(query) if actor.owns(t)]
        return _list_result(op, tasks, query=query)

    @traced
    @service_op("get_overdue_tasks")
    def get_overdue_tasks(self) -> ServiceResult:
        """Unfinished tasks of the actor whose due date has passed."""
        op = "get_overdue_tasks"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "view tasks")

        tasks = [t for t in self._tasks.find_overdue() if actor.owns(t)]
        return _list_result(op, tasks)

    @traced
    @service_op("get_tasks_due_soon")
    def get_tasks_due_soon(self, days: int | None = None) -> ServiceResult:
        """Unfinished tasks of the actor due within *days* days.

        *days* is passed to the store as given; None means the configured
        default.
        """
        op = "get_tasks_due_soon"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "view tasks")

        window = self._config.due_soon_days if days is None else days
        tasks = [t for t in self._tasks.find_due_soon(window) if actor.owns(t)]
        return _list_result(op, tasks)

    @traced
    @service_op("filter_tasks")
    def filter_tasks(self, filters: Mapping[str, Any] | None = None) -> ServiceResult:
        """Run a store filter query pinned to the actor's own tasks.

        Any ``owner_id`` in *filters* is replaced by the actor's id.
        """
        op = "filter_tasks"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "filter tasks")

        criteria = dict(filters or {})
        criteria["owner_id"] = actor.id
        return _list_result(op, self._tasks.filter(criteria))

    @traced
    @service_op("get_task_stats")
    def get_task_stats(self) -> ServiceResult:
        """Aggregate counters for the actor's tasks."""
        op = "get_task_stats"
        actor = self._actor
        if actor is None:
            return _unauthenticated(op, "view task statistics")

        stats = self._tasks.get_stats(actor.id)
        return ServiceResult(ok=True, op=op, data=dump_validated(TaskStatsData, stats))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load_owned(
        self,
        op: str,
        actor: Actor,
        task_id: str,
        forbidden_message: str,
    ) -> TaskRecord | ServiceResult:
        """Fetch *task_id* and check ownership; a ServiceResult means denial."""
        task = self._tasks.find_by_id(task_id)
        if task is None:
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, "Task not found", task_id=task_id
            )
        if not actor.owns(task):
            logger.info("task.access_denied", op=op, actor_id=actor.id, task_id=task_id)
            return ServiceResult.failure(
                op, ErrorCode.FORBIDDEN, forbidden_message, task_id=task_id
            )
        return task


def _unauthenticated(op: str, action: str) -> ServiceResult:
    return ServiceResult.failure(
        op, ErrorCode.UNAUTHENTICATED, f"You must be logged in to {action}"
    )


def _list_result(op: str, tasks: list[TaskRecord], *, query: str | None = None) -> ServiceResult:
    items = dump_validated_list(TaskItem, tasks)
    return ServiceResult(ok=True, op=op, data=items, count=len(items), query=query)
