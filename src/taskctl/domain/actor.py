"""Actor: the authenticated user context a task operation runs under.

An Actor is resolved once per session from a user record and is frozen
afterwards. Controllers are bound to one Actor (or to none) for their
whole lifetime.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class Actor(BaseModel):
    """Immutable identity of the acting user."""

    model_config = {"frozen": True}

    id: str
    name: str | None = None
    email: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Actor:
        """Build an Actor from a user-store record, ignoring unknown fields."""
        return cls(
            id=str(record["id"]),
            name=record.get("name"),
            email=record.get("email"),
        )

    def owns(self, task: dict[str, Any]) -> bool:
        """Whether this actor is the owner of *task*.

        Ids are opaque: an integer ``owner_id`` matches its string form.
        """
        owner = task.get("owner_id")
        return owner is not None and str(owner) == self.id
