"""Click base classes that add an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints worked invocations and
exits. On a group the listing ends with pointers to the subcommands that
carry examples of their own.
"""

from __future__ import annotations

import inspect
from typing import Any

import click


class _ExamplesMixin:
    """Shared ``--examples`` wiring for :class:`TaskCommand` and :class:`TaskGroup`."""

    params: list[click.Parameter]
    examples: str | None

    def _attach_examples(self, examples: str | None) -> None:
        self.examples = inspect.cleandoc(examples) if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        related = self._related_examples(ctx)
        if related:
            click.echo("\nMore examples:")
            for line in related:
                click.echo(f"  {line}")
        ctx.exit(0)

    def _related_examples(self, ctx: click.Context) -> list[str]:
        return []


class TaskCommand(_ExamplesMixin, click.Command):
    """Click Command that accepts an ``examples`` text."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)


class TaskGroup(_ExamplesMixin, click.Group):
    """Click Group that accepts an ``examples`` text.

    Subcommands default to :class:`TaskCommand`.
    """

    command_class = TaskCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)

    def _related_examples(self, ctx: click.Context) -> list[str]:
        return [
            f"{ctx.command_path} {name} --examples"
            for name, cmd in sorted(self.commands.items())
            if getattr(cmd, "examples", None)
        ]
