"""Scenario tests for LineupApplicationService."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from src.fm_common.enums import Role
from src.fm_common.errors import (
    InvalidPositionError,
    NotOwnedError,
    PositionMismatchError,
)
from src.fm_lineup.application.service import LineupApplicationService
from src.fm_lineup.domain.models import Lineup, LineupSlot
from src.fm_reference.domain.models import PlayerRef
from src.fm_reference.domain.provider import PlayerProviderProtocol
from src.fm_reference.infrastructure.static_catalog import StaticPlayerProvider
from src.fm_roster.application.schemas import SaleResponse
from src.fm_roster.application.service import RosterApplicationService
from tests.fakes import LEAGUE, FakeSession, InMemoryStore


def _svc(repos: dict[str, Any], provider: PlayerProviderProtocol) -> LineupApplicationService:
    return LineupApplicationService(
        repo=repos["lineup_repo"],
        roster_repo=repos["roster_repo"],
        budget_repo=repos["budget_repo"],
        provider=provider,
    )


@pytest.fixture
def owned(store: InMemoryStore) -> InMemoryStore:
    for pid in ("g2-mid", "fnc-mid", "fnc-top", "koi-adc"):
        store.seed_ownership("alice", pid)
    return store


class TestSetStarter:
    async def test_position_mismatch_keeps_previous_starter(
        self,
        repos: dict[str, Any],
        provider: StaticPlayerProvider,
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        svc = _svc(repos, provider)
        await svc.set_starter(db, "alice", LEAGUE, "g2-mid", "mid", 1)
        with pytest.raises(PositionMismatchError) as exc_info:
            await svc.set_starter(db, "alice", LEAGUE, "fnc-top", "mid", 1)
        assert exc_info.value.message == "Player fnc-top is a top, not a mid"
        lineup = await svc.get_lineup(db, "alice", LEAGUE, 1)
        assert [(e.position, e.player_id) for e in lineup.items] == [("mid", "g2-mid")]

    async def test_idempotent(
        self,
        repos: dict[str, Any],
        provider: StaticPlayerProvider,
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        svc = _svc(repos, provider)
        await svc.set_starter(db, "alice", LEAGUE, "g2-mid", "mid", 1)
        once = dict(owned.state.slots)
        await svc.set_starter(db, "alice", LEAGUE, "g2-mid", "mid", 1)
        assert owned.state.slots == once

    async def test_new_starter_displaces_previous(
        self,
        repos: dict[str, Any],
        provider: StaticPlayerProvider,
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        svc = _svc(repos, provider)
        await svc.set_starter(db, "alice", LEAGUE, "g2-mid", "mid")
        result = await svc.set_starter(db, "alice", LEAGUE, "fnc-mid", "MID")
        assert [e.player_id for e in result.items] == ["fnc-mid"]
        assert "g2-mid" in owned.owned("alice")

    async def test_bottom_is_adc(
        self,
        repos: dict[str, Any],
        provider: StaticPlayerProvider,
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        result = await _svc(repos, provider).set_starter(db, "alice", LEAGUE, "koi-adc", "bottom")
        assert result.items[0].position == "adc"

    async def test_not_owned(
        self,
        repos: dict[str, Any],
        provider: StaticPlayerProvider,
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        with pytest.raises(NotOwnedError):
            await _svc(repos, provider).set_starter(db, "alice", LEAGUE, "kc-mid", "mid")
        assert owned.state.slots == {}

    async def test_invalid_position(
        self,
        repos: dict[str, Any],
        provider: StaticPlayerProvider,
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        with pytest.raises(InvalidPositionError):
            await _svc(repos, provider).set_starter(db, "alice", LEAGUE, "g2-mid", "coach")


class SaleDuringLookup:
    """Provider that starts a sale of the looked-up player on the first lookup,
    then yields so the sale can run before the lookup returns."""

    def __init__(self, inner: StaticPlayerProvider) -> None:
        self._inner = inner
        self.sell: Callable[[], Awaitable[SaleResponse]] | None = None
        self.sale: asyncio.Task[SaleResponse] | None = None

    async def lookup_player(self, player_id: str) -> PlayerRef | None:
        if self.sell is not None and self.sale is None:
            self.sale = asyncio.create_task(self.sell())
            for _ in range(5):
                await asyncio.sleep(0)
        return await self._inner.lookup_player(player_id)

    async def list_players(
        self, team: str | None = None, role: Role | None = None
    ) -> list[PlayerRef]:
        return await self._inner.list_players(team, role)


class TestConcurrentSale:
    async def test_sale_racing_set_starter_leaves_no_orphan_slot(
        self,
        repos: dict[str, Any],
        provider: StaticPlayerProvider,
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        racing = SaleDuringLookup(provider)
        roster = RosterApplicationService(
            repo=repos["roster_repo"],
            budget_repo=repos["budget_repo"],
            lineup_repo=repos["lineup_repo"],
            provider=provider,
        )
        other_db = FakeSession(owned)
        racing.sell = lambda: roster.sell(other_db, "alice", LEAGUE, "g2-mid")

        await _svc(repos, racing).set_starter(db, "alice", LEAGUE, "g2-mid", "mid")
        assert racing.sale is not None
        sale = await racing.sale

        # The sale waited for the lineup write and then cleared the new slot.
        assert sale.lineup_slots_cleared == 1
        assert "g2-mid" not in owned.owned("alice")
        held = owned.owned("alice")
        assert all(slot.player_id in held for slot in owned.state.slots.values())


class TestGetLineup:
    async def test_default_matchday_and_separation(
        self,
        repos: dict[str, Any],
        provider: StaticPlayerProvider,
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        svc = _svc(repos, provider)
        await svc.set_starter(db, "alice", LEAGUE, "g2-mid", "mid")
        await svc.set_starter(db, "alice", LEAGUE, "fnc-top", "top", 2)
        day1 = await svc.get_lineup(db, "alice", LEAGUE)
        day2 = await svc.get_lineup(db, "alice", LEAGUE, 2)
        assert day1.matchday == 1
        assert [e.player_id for e in day1.items] == ["g2-mid"]
        assert [e.player_id for e in day2.items] == ["fnc-top"]

    async def test_empty_positions_omitted_and_player_merged(
        self,
        repos: dict[str, Any],
        provider: StaticPlayerProvider,
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        svc = _svc(repos, provider)
        await svc.set_starter(db, "alice", LEAGUE, "koi-adc", "adc")
        lineup = await svc.get_lineup(db, "alice", LEAGUE)
        assert len(lineup.items) == 1
        assert lineup.items[0].player is not None
        assert lineup.items[0].player.name == "Supa"

    async def test_unresolvable_player_has_no_details(
        self,
        repos: dict[str, Any],
        db: FakeSession,
        owned: InMemoryStore,
    ) -> None:
        owned.state.slots[("alice", LEAGUE, Role.TOP, 1)] = LineupSlot(
            user_id="alice", league_id=LEAGUE, position=Role.TOP, matchday=1, player_id="gone"
        )
        lineup = await _svc(repos, StaticPlayerProvider([])).get_lineup(db, "alice", LEAGUE)
        assert lineup.items[0].player_id == "gone"
        assert lineup.items[0].player is None


def test_lineup_tracks_all_five_positions() -> None:
    lineup = Lineup.from_slots("alice", LEAGUE, 1, [
        LineupSlot(user_id="alice", league_id=LEAGUE, position=Role.SUPPORT, matchday=1,
                   player_id="g2-sup"),
    ])
    assert set(lineup.slots) == set(Role)
    assert lineup.occupied() == [(Role.SUPPORT, "g2-sup")]
