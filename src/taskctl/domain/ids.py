"""Sequential ID prefixes and formatting.

Tasks and users get sequential IDs from the database counter table:
``TASK-0001``, ``USER-0001``. Minimum 4 digits, grows past 9999.

INVARIANT: IDs are permanent. Once generated, an ID never changes.
"""

from __future__ import annotations

TASK_PREFIX = "TASK-"
USER_PREFIX = "USER-"

SEQUENTIAL_PREFIXES: frozenset[str] = frozenset({TASK_PREFIX, USER_PREFIX})


def format_id(prefix: str, value: int) -> str:
    """Render a sequential ID, zero-padded to four digits."""
    return f"{prefix}{value:04d}"

