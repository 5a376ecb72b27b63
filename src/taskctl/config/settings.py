"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs - CLI flags passed by Click
  2. Env vars - ``TASKCTL_*`` prefix, ``__`` for nested sections
  3. TOML file - ``taskctl.toml`` discovered via walk-up
  4. Code defaults - baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from taskctl.config.discovery import find_config
from taskctl.config.models import StorageConfig, TasksConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``taskctl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class TaskSettings(BaseSettings):
    """Unified settings for taskctl, frozen after construction.

    Attributes:
        workspace_root: Directory holding the data dir (parent of
            ``taskctl.toml``, or CWD if no config found).
        config_path: The TOML file in use, if any.
        actor: User id the CLI acts as (``--as`` / ``TASKCTL_ACTOR``).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TASKCTL_",
        "env_nested_delimiter": "__",
    }

    workspace_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    actor: str | None = None

    # --- TOML sections ---
    storage: StorageConfig = Field(default_factory=StorageConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @property
    def db_path(self) -> Path:
        """Location of the SQLite database file."""
        return self.workspace_root / self.storage.data_dir / self.storage.db_name

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        workspace_root: Path | None = None,
        **cli_flags: Any,
    ) -> TaskSettings:
        """Construct settings from a CLI invocation.

        Discovers ``taskctl.toml`` via walk-up (or explicit *config_path*),
        resolves *workspace_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides. Flags passed
        as None are left to lower-priority sources.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(workspace_root)

        resolved_root = workspace_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        overrides = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(workspace_root=resolved_root, config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
