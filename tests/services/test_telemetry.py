"""Tests for telemetry primitives: Span and @traced."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest

from taskctl.domain.actor import Actor
from taskctl.services.result import ServiceResult
from taskctl.services.tasks import TaskService
from taskctl.services.telemetry import (
    Span,
    disable_telemetry,
    enable_telemetry,
    traced,
)
from tests.conftest import ALICE
from tests.fakes import FakeTaskStore, FakeUserStore


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test."""
    yield
    disable_telemetry()


# ── Span unit tests ──────────────────────────────────────────────────


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "duration_ms" in d
        assert "annotations" not in d

    def test_to_dict_with_annotations(self) -> None:
        span = Span(name="test")
        span.annotations["count"] = 3
        span.end()
        assert span.to_dict()["annotations"] == {"count": 3}


# ── @traced decorator tests ──────────────────────────────────────────


class TestTracedDecorator:
    def test_noop_when_disabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test")

        assert my_func().meta is None

    def test_injects_meta_when_enabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test", count=2)

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"].endswith("my_func")
        assert telemetry["duration_ms"] >= 0
        assert telemetry["annotations"] == {"ok": True, "count": 2}

    def test_preserves_existing_meta(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test", meta={"existing": "data"})

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert result.meta["existing"] == "data"
        assert "telemetry" in result.meta

    def test_non_service_result_passthrough(self) -> None:
        @traced
        def my_func() -> str:
            return "hello"

        enable_telemetry()
        assert my_func() == "hello"

    def test_service_operations_are_traced(self) -> None:
        svc = TaskService(FakeTaskStore(), FakeUserStore([ALICE]), Actor.from_record(ALICE))
        enable_telemetry()
        result = svc.get_tasks()
        assert result.meta is not None
        assert result.meta["telemetry"]["name"] == "TaskService.get_tasks"

    def test_failures_are_traced(self) -> None:
        svc = TaskService(FakeTaskStore(), FakeUserStore())
        enable_telemetry()
        result = svc.get_task_stats()
        assert not result.ok
        assert result.meta is not None
        assert result.meta["telemetry"]["annotations"]["ok"] is False
