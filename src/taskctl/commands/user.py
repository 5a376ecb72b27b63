"""Command group: user registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskctl.commands._base import TaskGroup

if TYPE_CHECKING:
    from taskctl.commands._context import AppContext

_USER_EXAMPLES = """\
  taskctl user add "Ada Lovelace" --email ada@example.com
  taskctl --json user list"""


@click.group(cls=TaskGroup, examples=_USER_EXAMPLES)
def user() -> None:
    """Register and list users."""


@user.command()
@click.argument("name")
@click.option("--email", default=None, help="Contact email.")
@click.pass_obj
def add(app: AppContext, name: str, email: str | None) -> None:
    """Register a new user."""
    app.emit(app.user_service().add_user(name, email=email))


@user.command(name="list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List registered users."""
    app.emit(app.user_service().list_users())
