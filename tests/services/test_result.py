"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from taskctl.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="create_task", data={"id": "TASK-0001"})
        assert result.ok is True
        assert result.op == "create_task"
        assert result.data == {"id": "TASK-0001"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure(
            "get_task", ErrorCode.NOT_FOUND, "Task not found", task_id="TASK-0009"
        )
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.message == "Task not found"
        assert result.error.detail == {"task_id": "TASK-0009"}

    def test_ok_with_error_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceResult(ok=True, op="x", error=ServiceError(code="E", message="boom"))

    @pytest.mark.parametrize("message", ["", "   "])
    def test_failure_requires_message(self, message: str) -> None:
        with pytest.raises(ValidationError):
            ServiceResult.failure("x", ErrorCode.UNEXPECTED, message)

    def test_failure_requires_error(self) -> None:
        with pytest.raises(ValidationError):
            ServiceResult(ok=False, op="x")

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="test", data={"key": "value"}, meta={"duration_ms": 42})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["key"] == "value"
        assert parsed["meta"]["duration_ms"] == 42

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestEnvelope:
    def test_success_list(self) -> None:
        result = ServiceResult(
            ok=True, op="search_tasks", data=[{"id": "TASK-0001"}], count=1, query="milk"
        )
        assert result.to_envelope() == {
            "success": True,
            "data": [{"id": "TASK-0001"}],
            "count": 1,
            "query": "milk",
        }

    def test_success_with_message(self) -> None:
        result = ServiceResult(ok=True, op="delete_task", data={"id": "T"}, message="Task deleted")
        assert result.to_envelope() == {
            "success": True,
            "data": {"id": "T"},
            "message": "Task deleted",
        }

    def test_failure_carries_message_string(self) -> None:
        result = ServiceResult.failure("get_task", ErrorCode.FORBIDDEN, "No access")
        assert result.to_envelope() == {"success": False, "error": "No access"}

    def test_empty_list_kept(self) -> None:
        envelope = ServiceResult(ok=True, op="get_tasks", data=[], count=0).to_envelope()
        assert envelope["data"] == []
        assert envelope["count"] == 0


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="Missing", detail={"task_id": "TASK-0001"})
        assert error.detail["task_id"] == "TASK-0001"

    def test_default_detail(self) -> None:
        error = ServiceError(code="E001", message="bad")
        assert error.detail == {}
