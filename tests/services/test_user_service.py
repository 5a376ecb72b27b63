"""Tests for UserService."""

from __future__ import annotations

from taskctl.services.result import ErrorCode
from taskctl.services.users import UserService
from tests.fakes import FakeUserStore


class TestAddUser:
    def test_creates_user(self) -> None:
        result = UserService(FakeUserStore()).add_user("Ada", email="ada@example.com")
        assert result.ok
        assert result.message == "User created"
        assert result.data["id"] == "USER-0001"
        assert result.data["email"] == "ada@example.com"

    def test_blank_name_rejected(self) -> None:
        store = FakeUserStore()
        result = UserService(store).add_user("   ")
        assert result.error is not None
        assert result.error.code == ErrorCode.VALIDATION_FAILED
        assert store.users == {}

    def test_store_fault(self) -> None:
        store = FakeUserStore()
        store.fail_with = RuntimeError("locked")
        result = UserService(store).add_user("Ada")
        assert result.error is not None
        assert result.error.code == ErrorCode.UNEXPECTED
        assert result.error.message == "locked"


class TestListUsers:
    def test_lists_with_count(self, user_store: FakeUserStore) -> None:
        result = UserService(user_store).list_users()
        assert result.ok
        assert result.count == 2
        assert [u["name"] for u in result.data] == ["Alice", "Bob"]
