"""BaseService and the operation boundary shared by all task services.

Every service receives its store collaborators at construction time.
Public operations are wrapped with :func:`service_op`, which converts
any fault raised by a collaborator into an ``UNEXPECTED`` ServiceResult
so callers never see an exception.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Concatenate, ParamSpec, TypeVar

import structlog

from taskctl.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from taskctl.services.ports import TaskStore, UserStore

logger = structlog.get_logger(__name__)

_P = ParamSpec("_P")
_S = TypeVar("_S")


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class TaskService(BaseService):
            @service_op("get_task")
            def get_task(self, task_id: str) -> ServiceResult:
                task = self._tasks.find_by_id(task_id)
                ...
    """

    def __init__(self, tasks: TaskStore, users: UserStore) -> None:
        self._tasks = tasks
        self._users = users


def service_op(
    op: str,
) -> Callable[
    [Callable[Concatenate[_S, _P], ServiceResult]],
    Callable[Concatenate[_S, _P], ServiceResult],
]:
    """Decorator: normalize collaborator faults raised by *op* into a result.

    INVARIANT: a wrapped operation always returns a ServiceResult.
    """

    def decorator(
        func: Callable[Concatenate[_S, _P], ServiceResult],
    ) -> Callable[Concatenate[_S, _P], ServiceResult]:
        @functools.wraps(func)
        def wrapper(self: _S, *args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
            try:
                return func(self, *args, **kwargs)
            except Exception as exc:
                logger.exception("op.failed", op=op, error_type=type(exc).__name__)
                message = str(exc).strip() or f"Unexpected {type(exc).__name__} in {op}"
                return ServiceResult.failure(op, ErrorCode.UNEXPECTED, message)

        return wrapper

    return decorator
