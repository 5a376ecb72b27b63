"""Atomic sequential ID generation for tasks and users.

The caller owns the transaction: pass a ``Connection`` obtained from
``engine.begin()`` so the counter increment participates in the same
atomic transaction as the insert it numbers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update

from taskctl.domain.ids import SEQUENTIAL_PREFIXES, format_id
from taskctl.infrastructure.database.schema import id_counters

if TYPE_CHECKING:
    from sqlalchemy import Connection


def next_sequential_id(conn: Connection, type_prefix: str) -> str:
    """Claim the next sequential ID for *type_prefix*.

    Returns:
        The new ID string (e.g. ``"TASK-0042"``).

    Raises:
        ValueError: If *type_prefix* is not a recognized sequential type.
    """
    if type_prefix not in SEQUENTIAL_PREFIXES:
        msg = (
            f"Unknown sequential type prefix: {type_prefix!r}. "
            f"Expected one of {sorted(SEQUENTIAL_PREFIXES)}"
        )
        raise ValueError(msg)

    current_value: int = conn.execute(
        select(id_counters.c.next_value).where(id_counters.c.type_prefix == type_prefix)
    ).scalar_one()

    conn.execute(
        update(id_counters)
        .where(id_counters.c.type_prefix == type_prefix)
        .values(next_value=current_value + 1)
    )
    return format_id(type_prefix, current_value)
