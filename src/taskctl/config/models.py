"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, taskctl.toml only contains
overrides. A fresh workspace needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    data_dir: str = ".taskctl"
    db_name: str = "taskctl.db"


class TasksConfig(BaseModel):
    """[tasks] section."""

    model_config = {"frozen": True}

    default_sort_order: Literal["asc", "desc"] = "desc"
    due_soon_days: int = 3

