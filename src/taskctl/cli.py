"""Root CLI group for taskctl with global flags and command registration."""

from __future__ import annotations

import click

from taskctl import __version__
from taskctl.commands import register_commands
from taskctl.commands._context import AppContext
from taskctl.config.settings import TaskSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="taskctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--as", "actor", default=None, metavar="USER_ID", help="Act as this user.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    actor: str | None,
) -> None:
    """taskctl - ownership-scoped task management."""
    settings = TaskSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        actor=actor,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
