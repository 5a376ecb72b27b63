"""Repositories implementing the task and user store ports."""

from taskctl.infrastructure.repositories.tasks import TaskRepository
from taskctl.infrastructure.repositories.users import UserRepository

__all__ = ["TaskRepository", "UserRepository"]
