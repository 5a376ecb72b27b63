"""UserService: register and list the users tasks can be owned by."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from taskctl.domain.types import is_blank
from taskctl.services.base import service_op
from taskctl.services.contracts import UserItem, dump_validated, dump_validated_list
from taskctl.services.result import ErrorCode, ServiceResult
from taskctl.services.telemetry import traced

if TYPE_CHECKING:
    from taskctl.services.ports import UserRegistry

logger = structlog.get_logger(__name__)


class UserService:
    """User administration. Not actor-scoped: the CLI uses it for seeding."""

    def __init__(self, users: UserRegistry) -> None:
        self._users = users

    @traced
    @service_op("add_user")
    def add_user(self, name: str, email: str | None = None) -> ServiceResult:
        op = "add_user"
        if is_blank(name):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "User name is required")
        user = self._users.create(name, email=email)
        logger.info("user.created", user_id=user["id"])
        return ServiceResult(
            ok=True, op=op, data=dump_validated(UserItem, user), message="User created"
        )

    @traced
    @service_op("list_users")
    def list_users(self) -> ServiceResult:
        items = dump_validated_list(UserItem, self._users.list_users())
        return ServiceResult(ok=True, op="list_users", data=items, count=len(items))
