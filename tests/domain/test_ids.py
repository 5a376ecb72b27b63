"""Tests for ID formatting."""

from __future__ import annotations

import pytest

from taskctl.domain.ids import SEQUENTIAL_PREFIXES, TASK_PREFIX, USER_PREFIX, format_id


class TestFormatId:
    @pytest.mark.parametrize(
        ("prefix", "value", "expected"),
        [
            (TASK_PREFIX, 1, "TASK-0001"),
            (TASK_PREFIX, 42, "TASK-0042"),
            (USER_PREFIX, 9999, "USER-9999"),
            (USER_PREFIX, 12345, "USER-12345"),
        ],
    )
    def test_zero_padded(self, prefix: str, value: int, expected: str) -> None:
        assert format_id(prefix, value) == expected


def test_sequential_prefixes() -> None:
    assert SEQUENTIAL_PREFIXES == {"TASK-", "USER-"}
