"""Task field vocabularies and caller-facing sentinels."""

from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    """Descriptive priority of a task (opaque to access control)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


# ``assignee_id`` value that resolves to the creating actor.
ASSIGN_SELF = "self"

# ``status`` option value meaning "no status filter".
ALL_STATUSES = "all"

# Fields a caller may never set or change through an update.
IMMUTABLE_FIELDS: frozenset[str] = frozenset({"id", "owner_id", "created"})

SORT_FIELDS: frozenset[str] = frozenset(
    {"title", "status", "priority", "due_date", "created", "modified"}
)


def is_blank(value: object) -> bool:
    """True when *value* is missing, not a string, or only whitespace."""
    return not isinstance(value, str) or not value.strip()
