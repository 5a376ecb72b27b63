"""Tests for task field vocabularies."""

from __future__ import annotations

import pytest

from taskctl.domain.types import IMMUTABLE_FIELDS, Priority, is_blank


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n", 0, ["x"]])
    def test_blank(self, value: object) -> None:
        assert is_blank(value)

    @pytest.mark.parametrize("value", ["x", "  Buy milk  "])
    def test_not_blank(self, value: str) -> None:
        assert not is_blank(value)


def test_immutable_fields() -> None:
    assert IMMUTABLE_FIELDS == {"id", "owner_id", "created"}


def test_priorities() -> None:
    assert [p.value for p in Priority] == ["low", "medium", "high"]
