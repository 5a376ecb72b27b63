"""ServiceResult and ServiceError - the result envelope of every operation.

INVARIANT: All service-layer methods return ServiceResult, never raise.
``ok=False`` always carries an error with a non-empty message and
``ok=True`` never carries one. The CLI and any other adapter consume
this type, usually through :meth:`ServiceResult.to_envelope`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, Field, model_validator


class ErrorCode(StrEnum):
    """Failure taxonomy shared by all task operations."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    OPERATION_FAILED = "OPERATION_FAILED"
    UNEXPECTED = "UNEXPECTED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_task"``).
        data: Operation payload: a task record, a list of records, or stats.
        message: Human-readable outcome of a mutating operation.
        count: Number of records for list-returning operations.
        query: Echo of the search text for search operations.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, telemetry).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: Any = None
    message: str | None = None
    count: int | None = None
    query: str | None = None
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _check_error_matches_ok(self) -> Self:
        if self.ok and self.error is not None:
            raise ValueError("a successful result cannot carry an error")
        if not self.ok and (self.error is None or not self.error.message.strip()):
            raise ValueError("a failed result requires a non-empty error message")
        return self

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Build an ``ok=False`` result with a structured error."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )

    def to_envelope(self) -> dict[str, Any]:
        """Render the public ``{success, data, error, message, count, query}`` shape.

        Keys whose value is unset are omitted; ``error`` is the message string.
        """
        envelope: dict[str, Any] = {"success": self.ok}
        if self.data is not None:
            envelope["data"] = self.data
        if self.error is not None:
            envelope["error"] = self.error.message
        if self.message is not None:
            envelope["message"] = self.message
        if self.count is not None:
            envelope["count"] = self.count
        if self.query is not None:
            envelope["query"] = self.query
        return envelope
