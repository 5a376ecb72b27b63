"""Subcommand modules for taskctl.

Provides register_commands() which uses deferred imports to keep
``taskctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``task`` and ``user`` command groups on the root CLI group."""
    from taskctl.commands.task import task
    from taskctl.commands.user import user

    cli.add_command(task)
    cli.add_command(user)
