"""Command group: task operations for the ``--as`` user."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from taskctl.commands._base import TaskGroup
from taskctl.domain.lifecycle import TaskStatus
from taskctl.domain.types import ALL_STATUSES, SORT_FIELDS, Priority

if TYPE_CHECKING:
    from taskctl.commands._context import AppContext

_STATUSES = [s.value for s in TaskStatus]
_PRIORITIES = [p.value for p in Priority]

_TASK_EXAMPLES = """\
  taskctl --as USER-0001 task create "Buy milk" --due 2026-11-01 --assignee self
  taskctl --as USER-0001 task list --status pending --sort-by due_date --order asc
  taskctl --as USER-0001 task search milk
  taskctl --as USER-0001 task toggle TASK-0001
  taskctl --as USER-0001 task filter --priority high --tag home
  taskctl --as USER-0001 --json task stats"""


@click.group(cls=TaskGroup, examples=_TASK_EXAMPLES)
def task() -> None:
    """Create, query, and change your tasks."""


def _task_fields(
    *,
    title: str | None = None,
    description: str | None,
    priority: str | None,
    due: str | None,
    assignee: str | None,
    tags: tuple[str, ...],
    status: str | None,
) -> dict[str, Any]:
    """Collect the options the user actually passed into a field mapping."""
    fields: dict[str, Any] = {}
    if title is not None:
        fields["title"] = title
    if description is not None:
        fields["description"] = description
    if priority is not None:
        fields["priority"] = priority
    if due is not None:
        fields["due_date"] = due
    if assignee is not None:
        fields["assignee_id"] = assignee
    if tags:
        fields["tags"] = list(tags)
    if status is not None:
        fields["status"] = status
    return fields


@task.command(
    examples="""\
  taskctl --as USER-0001 task create "Buy milk"
  taskctl --as USER-0001 task create "Review PR" --assignee USER-0002 --priority high
  taskctl --as USER-0001 task create "Pay rent" --due 2026-11-01 --tag home --tag money"""
)
@click.argument("title")
@click.option("--description", default=None, help="Longer description.")
@click.option("--priority", type=click.Choice(_PRIORITIES), default=None, help="Priority.")
@click.option("--due", default=None, help="Due date (YYYY-MM-DD).")
@click.option("--assignee", default=None, help="Assignee user id, or 'self'.")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@click.option("--status", type=click.Choice(_STATUSES), default=None, help="Initial status.")
@click.pass_obj
def create(
    app: AppContext,
    title: str,
    description: str | None,
    priority: str | None,
    due: str | None,
    assignee: str | None,
    tags: tuple[str, ...],
    status: str | None,
) -> None:
    """Create a task owned by you."""
    data = _task_fields(
        title=title,
        description=description,
        priority=priority,
        due=due,
        assignee=assignee,
        tags=tags,
        status=status,
    )
    app.emit(app.task_service().create_task(data))


@task.command(name="list")
@click.option(
    "--status",
    type=click.Choice([ALL_STATUSES, *_STATUSES]),
    default=ALL_STATUSES,
    help="Only tasks with this status.",
)
@click.option("--search", "search_query", default=None, help="Text to search for.")
@click.option("--sort-by", type=click.Choice(sorted(SORT_FIELDS)), default=None, help="Sort field.")
@click.option("--order", type=click.Choice(["asc", "desc"]), default=None, help="Sort order.")
@click.pass_obj
def list_cmd(
    app: AppContext,
    status: str,
    search_query: str | None,
    sort_by: str | None,
    order: str | None,
) -> None:
    """List your tasks."""
    result = app.task_service().get_tasks(
        status=status,
        search_query=search_query,
        sort_by=sort_by,
        sort_order=order,
    )
    app.emit(result)


@task.command()
@click.argument("task_id")
@click.pass_obj
def get(app: AppContext, task_id: str) -> None:
    """Show one of your tasks."""
    app.emit(app.task_service().get_task(task_id))


@task.command(
    examples="""\
  taskctl --as USER-0001 task update TASK-0001 --title "Buy oat milk"
  taskctl --as USER-0001 task update TASK-0001 --status blocked --due 2026-12-01"""
)
@click.argument("task_id")
@click.option("--title", default=None, help="New title.")
@click.option("--description", default=None, help="New description.")
@click.option("--priority", type=click.Choice(_PRIORITIES), default=None, help="New priority.")
@click.option("--due", default=None, help="New due date (YYYY-MM-DD).")
@click.option("--assignee", default=None, help="New assignee user id.")
@click.option("--tag", "tags", multiple=True, help="Replace tags (repeatable).")
@click.option("--status", type=click.Choice(_STATUSES), default=None, help="New status.")
@click.pass_obj
def update(
    app: AppContext,
    task_id: str,
    title: str | None,
    description: str | None,
    priority: str | None,
    due: str | None,
    assignee: str | None,
    tags: tuple[str, ...],
    status: str | None,
) -> None:
    """Change fields of one of your tasks."""
    changes = _task_fields(
        title=title,
        description=description,
        priority=priority,
        due=due,
        assignee=assignee,
        tags=tags,
        status=status,
    )
    if not changes:
        click.echo("No changes specified. Use --help for options.", err=True)
        raise SystemExit(1)
    app.emit(app.task_service().update_task(task_id, changes))


@task.command()
@click.argument("task_id")
@click.pass_obj
def delete(app: AppContext, task_id: str) -> None:
    """Delete one of your tasks."""
    app.emit(app.task_service().delete_task(task_id))


@task.command()
@click.argument("query_text")
@click.pass_obj
def search(app: AppContext, query_text: str) -> None:
    """Search your tasks by title, description, or tag."""
    app.emit(app.task_service().search_tasks(query_text))


@task.command()
@click.pass_obj
def overdue(app: AppContext) -> None:
    """List your unfinished tasks that are past due."""
    app.emit(app.task_service().get_overdue_tasks())


@task.command(name="due-soon")
@click.option("--days", type=int, default=None, help="Window size in days.")
@click.pass_obj
def due_soon(app: AppContext, days: int | None) -> None:
    """List your unfinished tasks due in the next few days."""
    app.emit(app.task_service().get_tasks_due_soon(days))


@task.command()
@click.pass_obj
def stats(app: AppContext) -> None:
    """Show counters for your tasks."""
    app.emit(app.task_service().get_task_stats())


@task.command(
    examples="""\
  taskctl --as USER-0001 task toggle TASK-0001
  taskctl --as USER-0001 task toggle TASK-0001 --status blocked"""
)
@click.argument("task_id")
@click.option(
    "--status",
    type=click.Choice(_STATUSES),
    default=None,
    help="Target status. Without it the status advances one step.",
)
@click.pass_obj
def toggle(app: AppContext, task_id: str, status: str | None) -> None:
    """Advance a task along pending, in-progress, completed."""
    app.emit(app.task_service().toggle_task_status(task_id, status))


@task.command(name="filter")
@click.option("--status", type=click.Choice(_STATUSES), default=None, help="Status.")
@click.option("--priority", type=click.Choice(_PRIORITIES), default=None, help="Priority.")
@click.option("--assignee", default=None, help="Assignee user id.")
@click.option("--tag", default=None, help="Tag.")
@click.option("--due-before", default=None, help="Due on or before (YYYY-MM-DD).")
@click.option("--due-after", default=None, help="Due on or after (YYYY-MM-DD).")
@click.pass_obj
def filter_cmd(
    app: AppContext,
    status: str | None,
    priority: str | None,
    assignee: str | None,
    tag: str | None,
    due_before: str | None,
    due_after: str | None,
) -> None:
    """Filter your tasks by field values."""
    criteria = {
        "status": status,
        "priority": priority,
        "assignee_id": assignee,
        "tag": tag,
        "due_before": due_before,
        "due_after": due_after,
    }
    app.emit(app.task_service().filter_tasks({k: v for k, v in criteria.items() if v is not None}))
