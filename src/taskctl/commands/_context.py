"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Workspace initialization, service
construction bound to the ``--as`` actor, and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from taskctl.config.settings import TaskSettings
    from taskctl.infrastructure.workspace import Workspace
    from taskctl.services.result import ServiceResult
    from taskctl.services.tasks import TaskService
    from taskctl.services.users import UserService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is created on first use so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(self, settings: TaskSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from taskctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from taskctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The workspace instance (created lazily on first access)."""
        if self._workspace is None:
            from taskctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def task_service(self) -> TaskService:
        """A task controller bound to the ``--as`` user (or to no user).

        The resolved actor is bound into the logging context as well.
        """
        from taskctl.config.logging import bind_actor
        from taskctl.services.tasks import TaskService

        ws = self.workspace
        base = TaskService(ws.tasks, ws.users, config=self.settings.tasks)
        service = base.as_user(self.settings.actor)
        bind_actor(service.actor.id if service.actor is not None else None)
        return service

    def user_service(self) -> UserService:
        from taskctl.services.users import UserService

        return UserService(self.workspace.users)

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output (JSON mode already includes them).
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
