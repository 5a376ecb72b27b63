"""Rich Console factory and theme for taskctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TASK_THEME = Theme(
    {
        "task.ok": "bold green",
        "task.error": "bold red",
        "task.warning": "bold yellow",
        "task.op": "bold cyan",
        "task.key": "dim",
        "task.id": "bold blue",
        "task.title": "bold",
        "task.status.pending": "white",
        "task.status.in-progress": "yellow",
        "task.status.completed": "green",
        "task.status.blocked": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TASK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str | None) -> str:
    """Return the Rich style name for a task status."""
    if status is None or f"task.status.{status}" not in TASK_THEME.styles:
        return ""
    return f"task.status.{status}"
