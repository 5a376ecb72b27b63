"""Shared pytest fixtures and test helpers for taskctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from taskctl.config.settings import TaskSettings
from taskctl.domain.actor import Actor
from taskctl.infrastructure.database.engine import init_database
from taskctl.infrastructure.workspace import Workspace
from taskctl.services.tasks import TaskService
from taskctl.services.telemetry import disable_telemetry
from tests.fakes import FakeTaskStore, FakeUserStore

ALICE = {"id": "USER-0001", "name": "Alice", "email": "alice@example.com"}
BOB = {"id": "USER-0002", "name": "Bob", "email": None}


@pytest.fixture(autouse=True)
def _clean_process_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate tests from TASKCTL_* env vars, telemetry, and CLI log state."""
    for key in list(os.environ):
        if key.startswith("TASKCTL_"):
            monkeypatch.delenv(key)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    disable_telemetry()
    structlog.contextvars.clear_contextvars()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Engine:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "taskctl.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """Fully initialized workspace on a temp directory."""
    settings = TaskSettings.from_cli(workspace_root=tmp_path)
    ws = Workspace(settings)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def user_store() -> FakeUserStore:
    return FakeUserStore([ALICE, BOB])


@pytest.fixture
def task_store() -> FakeTaskStore:
    return FakeTaskStore(
        [
            make_task("TASK-0001", "Buy milk", owner_id=ALICE["id"]),
            make_task("TASK-0002", "Write report", owner_id=ALICE["id"], status="completed"),
            make_task("TASK-0003", "Bob's milk run", owner_id=BOB["id"]),
        ]
    )


@pytest.fixture
def service(task_store: FakeTaskStore, user_store: FakeUserStore) -> TaskService:
    """Task controller bound to Alice."""
    return TaskService(task_store, user_store, Actor.from_record(ALICE))


@pytest.fixture
def anonymous(task_store: FakeTaskStore, user_store: FakeUserStore) -> TaskService:
    """Task controller with no actor."""
    return TaskService(task_store, user_store)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_task(task_id: str, title: str, *, owner_id: str, **fields: Any) -> dict[str, Any]:
    """Build a task record the way a store would return it."""
    return {
        "id": task_id,
        "title": title,
        "owner_id": owner_id,
        "status": "pending",
        "priority": "medium",
        "tags": [],
        **fields,
    }


def add_user(workspace: Workspace, name: str, **kwargs: Any) -> dict[str, Any]:
    """Register a user through the repository."""
    return workspace.users.create(name, **kwargs)
