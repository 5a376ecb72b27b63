"""Tests for SessionService actor resolution."""

from __future__ import annotations

import pytest

from taskctl.domain.actor import Actor
from taskctl.services.session import SessionService
from tests.conftest import ALICE
from tests.fakes import FakeUserStore


class TestResolveActor:
    def test_known_user(self, user_store: FakeUserStore) -> None:
        actor = SessionService(user_store).resolve_actor(ALICE["id"])
        assert actor is not None
        assert actor.id == ALICE["id"]
        assert actor.name == "Alice"
        assert actor.email == "alice@example.com"

    def test_unknown_user(self, user_store: FakeUserStore) -> None:
        assert SessionService(user_store).resolve_actor("USER-0404") is None
        assert user_store.lookups == ["USER-0404"]

    @pytest.mark.parametrize("user_id", [None, "", "  "])
    def test_blank_id_skips_lookup(self, user_store: FakeUserStore, user_id: str | None) -> None:
        assert SessionService(user_store).resolve_actor(user_id) is None
        assert user_store.lookups == []

    def test_actor_owns_only_own_tasks(self, user_store: FakeUserStore) -> None:
        actor = SessionService(user_store).resolve_actor(ALICE["id"])
        assert actor is not None
        assert actor.owns({"owner_id": ALICE["id"]})
        assert not actor.owns({"owner_id": "USER-0002"})
        assert not actor.owns({})

    def test_actor_owns_integer_owner_id(self) -> None:
        actor = Actor.from_record({"id": 7, "name": "Ida"})
        assert actor.id == "7"
        assert actor.owns({"owner_id": 7})
        assert not actor.owns({"owner_id": 70})
