"""SessionService: resolve the acting user for a controller session."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from taskctl.domain.actor import Actor
from taskctl.domain.types import is_blank

if TYPE_CHECKING:
    from taskctl.services.ports import UserStore

logger = structlog.get_logger(__name__)


class SessionService:
    """Turns a user id into an :class:`Actor` via the user store.

    A lookup miss is not an error here: it yields ``None``, and every task
    operation reports the missing actor uniformly.
    """

    def __init__(self, users: UserStore) -> None:
        self._users = users

    def resolve_actor(self, user_id: str | None) -> Actor | None:
        if is_blank(user_id):
            return None
        record = self._users.find_by_id(str(user_id))
        if record is None:
            logger.info("session.actor_missing", user_id=user_id)
            return None
        actor = Actor.from_record(record)
        logger.debug("session.actor_resolved", actor_id=actor.id)
        return actor
