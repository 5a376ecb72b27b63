"""Telemetry primitives - Span and the @traced decorator.

Near-zero overhead when disabled (single ContextVar.get per call).
When enabled via ``--verbose``, every traced service operation is timed,
logged as ``op.complete``, and its span is injected into
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from taskctl.services.result import ServiceResult

logger = structlog.get_logger(__name__)

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)


@dataclass
class Span:
    """Timing span for one service operation."""

    name: str
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.annotations:
            result["annotations"] = self.annotations
        return result


def _inject_meta(result: ServiceResult, span: Span) -> ServiceResult:
    """Return a copy of *result* with span data merged into meta (frozen model)."""
    merged_meta = {**(result.meta or {}), "telemetry": span.to_dict()}
    return result.model_copy(update={"meta": merged_meta})


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: time a service method and inject span data into ServiceResult.meta.

    No-op when telemetry is disabled.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        try:
            result = func(*args, **kwargs)
        finally:
            span.end()

        ok = getattr(result, "ok", True)
        if isinstance(result, ServiceResult):
            span.annotations["ok"] = result.ok
            if result.count is not None:
                span.annotations["count"] = result.count
            result = _inject_meta(result, span)  # type: ignore[assignment]
        logger.debug(
            "op.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            ok=ok,
        )
        return result

    return wrapper


def enable_telemetry() -> None:
    """Enable verbose telemetry (called by AppContext at startup)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    """Disable verbose telemetry."""
    _verbose_enabled.set(False)
