"""Workspace: the storage bundle a CLI invocation runs against.

Owns the SQLite engine and the two repositories built on it. Constructed
once per process from :class:`TaskSettings`; adapters hand its
repositories to the services as their store collaborators.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskctl.infrastructure.database.engine import init_database
from taskctl.infrastructure.repositories import TaskRepository, UserRepository

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from taskctl.config.settings import TaskSettings


class Workspace:
    """Database engine plus task and user repositories."""

    def __init__(self, settings: TaskSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(settings.db_path)
        self._tasks = TaskRepository(self._engine)
        self._users = UserRepository(self._engine)

    @property
    def root(self) -> Path:
        """The workspace root directory."""
        return self._settings.workspace_root

    @property
    def tasks(self) -> TaskRepository:
        return self._tasks

    @property
    def users(self) -> UserRepository:
        return self._users

    def close(self) -> None:
        """Release pooled database connections."""
        self._engine.dispose()
