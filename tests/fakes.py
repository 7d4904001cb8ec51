"""In-memory repositories and session for service-level scenario tests.

Every test builds its own ``InMemoryStore``; nothing is shared between
tests. ``FakeSession.commit`` checkpoints the store and ``rollback``
restores the last checkpoint, so a failed operation leaves exactly the
state a real transaction rollback would. Unique keys and the money >= 0
constraint are enforced the same way the database enforces them.

``lock_accounts`` takes a per-account asyncio.Lock held by the session until
it commits or rolls back, mirroring SELECT ... FOR UPDATE row locks.
"""

import asyncio
import copy
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.fm_budget.domain.models import BudgetAccount, TransactionEntry
from src.fm_common.datetime_utils import utc_now
from src.fm_common.enums import OfferStatus, Role
from src.fm_common.errors import (
    AlreadyOwnedError,
    AlreadyParticipantError,
    BudgetAccountNotFoundError,
    InsufficientFundsError,
)
from src.fm_league.domain.models import LeagueMember
from src.fm_lineup.domain.models import LineupSlot
from src.fm_offer.domain.models import Offer
from src.fm_reference.domain.models import PlayerRef
from src.fm_reference.infrastructure.static_catalog import StaticPlayerProvider
from src.fm_roster.domain.models import Ownership

LEAGUE = "league-1"


def _player(pid: str, name: str, team: str, role: Role, price: int) -> PlayerRef:
    return PlayerRef(id=pid, name=name, team=team, role=role, price=price, team_name=team)


# Four LEC teams, one player per role each; prices in millions.
CATALOG: list[PlayerRef] = [
    _player("g2-top", "BrokenBlade", "G2", Role.TOP, 8),
    _player("g2-jng", "SkewMond", "G2", Role.JUNGLE, 6),
    _player("g2-mid", "Caps", "G2", Role.MID, 9),
    _player("g2-adc", "Hans Sama", "G2", Role.ADC, 8),
    _player("g2-sup", "Labrov", "G2", Role.SUPPORT, 5),
    _player("fnc-top", "Oscarinin", "FNC", Role.TOP, 6),
    _player("fnc-jng", "Razork", "FNC", Role.JUNGLE, 7),
    _player("fnc-mid", "Poby", "FNC", Role.MID, 7),
    _player("fnc-adc", "Upset", "FNC", Role.ADC, 9),
    _player("fnc-sup", "Mikyx", "FNC", Role.SUPPORT, 6),
    _player("koi-top", "Myrwn", "MKOI", Role.TOP, 5),
    _player("koi-jng", "Elyoya", "MKOI", Role.JUNGLE, 8),
    _player("koi-mid", "Jojopyun", "MKOI", Role.MID, 7),
    _player("koi-adc", "Supa", "MKOI", Role.ADC, 6),
    _player("koi-sup", "Alvaro", "MKOI", Role.SUPPORT, 5),
    _player("kc-top", "Canna", "KC", Role.TOP, 7),
    _player("kc-jng", "Yike", "KC", Role.JUNGLE, 6),
    _player("kc-mid", "Vladi", "KC", Role.MID, 6),
    _player("kc-adc", "Caliste", "KC", Role.ADC, 9),
    _player("kc-sup", "Targamas", "KC", Role.SUPPORT, 7),
]


def make_provider(players: list[PlayerRef] | None = None) -> StaticPlayerProvider:
    return StaticPlayerProvider(CATALOG if players is None else players)


# ---------------------------------------------------------------------------
# Store and session
# ---------------------------------------------------------------------------


@dataclass
class _State:
    members: dict[tuple[str, str], LeagueMember] = field(default_factory=dict)
    accounts: dict[tuple[str, str], BudgetAccount] = field(default_factory=dict)
    ownerships: dict[tuple[str, str, str], Ownership] = field(default_factory=dict)
    slots: dict[tuple[str, str, Role, int], LineupSlot] = field(default_factory=dict)
    offers: dict[str, Offer] = field(default_factory=dict)
    entries: list[TransactionEntry] = field(default_factory=list)
    next_entry_id: int = 1


class InMemoryStore:
    def __init__(self) -> None:
        self.state = _State()
        self._checkpoint = copy.deepcopy(self.state)
        self._row_locks: dict[tuple[str, str], asyncio.Lock] = {}

    def checkpoint(self) -> None:
        self._checkpoint = copy.deepcopy(self.state)

    def restore(self) -> None:
        self.state = copy.deepcopy(self._checkpoint)

    async def lock_row(self, session: "FakeSession", key: tuple[str, str]) -> None:
        lock = self._row_locks.setdefault(key, asyncio.Lock())
        if lock in session.held_locks:
            return
        await lock.acquire()
        session.held_locks.append(lock)

    # Seeding helpers write straight through and checkpoint.

    def seed_member(self, user_id: str, league_id: str = LEAGUE, money: int = 75) -> None:
        self.state.members[(league_id, user_id)] = LeagueMember(
            league_id=league_id, user_id=user_id, joined_at=utc_now()
        )
        self.state.accounts[(user_id, league_id)] = BudgetAccount(
            user_id=user_id, league_id=league_id, money=money
        )
        self.checkpoint()

    def seed_ownership(
        self,
        user_id: str,
        player_id: str,
        league_id: str = LEAGUE,
        team: str | None = None,
        role: Role | None = None,
    ) -> None:
        """Team and role default to the CATALOG entry for ``player_id``."""
        listed = next((p for p in CATALOG if p.id == player_id), None)
        if listed is not None:
            team = team or listed.team
            role = role or listed.role
        if team is None or role is None:
            raise KeyError(f"{player_id} is not in CATALOG; pass team and role")
        self.state.ownerships[(user_id, league_id, player_id)] = Ownership(
            user_id=user_id,
            league_id=league_id,
            player_id=player_id,
            team=team,
            role=role,
            purchased_at=utc_now(),
        )
        self.checkpoint()

    # Read helpers for assertions.

    def money(self, user_id: str, league_id: str = LEAGUE) -> int:
        return self.state.accounts[(user_id, league_id)].money

    def owned(self, user_id: str, league_id: str = LEAGUE) -> set[str]:
        return {
            pid for (uid, lid, pid) in self.state.ownerships if uid == user_id and lid == league_id
        }


class FakeSession:
    """Stands in for AsyncSession: only commit / rollback are used by services."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.commits = 0
        self.rollbacks = 0
        self.held_locks: list[asyncio.Lock] = []

    def _release(self) -> None:
        for lock in self.held_locks:
            lock.release()
        self.held_locks.clear()

    async def commit(self) -> None:
        self.store.checkpoint()
        self.commits += 1
        self._release()

    async def rollback(self) -> None:
        self.store.restore()
        self.rollbacks += 1
        self._release()


def _copy(obj: Any) -> Any:
    return dataclasses.replace(obj)


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class FakeLeagueRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def add_member(self, db: object, league_id: str, user_id: str) -> LeagueMember:
        members = self._store.state.members
        if (league_id, user_id) in members:
            raise AlreadyParticipantError(user_id, league_id)
        member = LeagueMember(league_id=league_id, user_id=user_id, joined_at=utc_now())
        members[(league_id, user_id)] = member
        return _copy(member)

    async def is_member(self, db: object, league_id: str, user_id: str) -> bool:
        return (league_id, user_id) in self._store.state.members

    async def list_members(self, db: object, league_id: str) -> list[LeagueMember]:
        return [
            _copy(m) for (lid, _), m in self._store.state.members.items() if lid == league_id
        ]


class FakeBudgetRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _account(self, user_id: str, league_id: str) -> BudgetAccount:
        account = self._store.state.accounts.get((user_id, league_id))
        if account is None:
            raise BudgetAccountNotFoundError(user_id, league_id)
        return account

    async def get_account(self, db: object, user_id: str, league_id: str) -> BudgetAccount | None:
        account = self._store.state.accounts.get((user_id, league_id))
        return _copy(account) if account else None

    async def list_accounts(self, db: object, league_id: str) -> list[BudgetAccount]:
        accounts = [a for (_, lid), a in self._store.state.accounts.items() if lid == league_id]
        return [_copy(a) for a in sorted(accounts, key=lambda a: (-a.money, a.user_id))]

    async def open_account(
        self, db: object, user_id: str, league_id: str, starting_money: int
    ) -> BudgetAccount:
        accounts = self._store.state.accounts
        if (user_id, league_id) in accounts:
            raise AlreadyParticipantError(user_id, league_id)
        account = BudgetAccount(user_id=user_id, league_id=league_id, money=starting_money)
        accounts[(user_id, league_id)] = account
        return _copy(account)

    async def lock_accounts(
        self, db: FakeSession, league_id: str, user_ids: list[str]
    ) -> dict[str, BudgetAccount]:
        ordered = sorted(set(user_ids))
        for uid in ordered:
            await self._store.lock_row(db, (uid, league_id))
        return {uid: _copy(self._account(uid, league_id)) for uid in ordered}

    async def debit(self, db: object, user_id: str, league_id: str, amount: int) -> BudgetAccount:
        account = self._account(user_id, league_id)
        if account.money < amount:
            raise InsufficientFundsError(amount, account.money)
        account.money -= amount
        account.version += 1
        return _copy(account)

    async def credit(self, db: object, user_id: str, league_id: str, amount: int) -> BudgetAccount:
        account = self._account(user_id, league_id)
        account.money += amount
        account.version += 1
        return _copy(account)

    async def append_entry(self, db: object, entry: TransactionEntry) -> TransactionEntry:
        state = self._store.state
        stored = dataclasses.replace(entry, id=state.next_entry_id, created_at=utc_now())
        state.next_entry_id += 1
        state.entries.append(stored)
        return _copy(stored)

    async def list_entries(
        self, db: object, league_id: str, cursor_id: int | None, limit: int, user_id: str | None
    ) -> list[TransactionEntry]:
        rows = [
            e
            for e in self._store.state.entries
            if e.league_id == league_id
            and (cursor_id is None or (e.id or 0) < cursor_id)
            and (user_id is None or e.user_id == user_id)
        ]
        rows.sort(key=lambda e: e.id or 0, reverse=True)
        return [_copy(e) for e in rows[:limit]]


class FakeRosterRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_ownership(
        self, db: object, user_id: str, league_id: str, player_id: str
    ) -> Ownership | None:
        ownership = self._store.state.ownerships.get((user_id, league_id, player_id))
        return _copy(ownership) if ownership else None

    async def list_ownerships(self, db: object, user_id: str, league_id: str) -> list[Ownership]:
        return [
            _copy(o)
            for (uid, lid, _), o in self._store.state.ownerships.items()
            if uid == user_id and lid == league_id
        ]

    async def add_ownership(
        self, db: object, user_id: str, league_id: str, player: PlayerRef, purchased_at: datetime
    ) -> Ownership:
        key = (user_id, league_id, player.id)
        if key in self._store.state.ownerships:
            raise AlreadyOwnedError(player.id, league_id)
        ownership = Ownership(
            user_id=user_id,
            league_id=league_id,
            player_id=player.id,
            team=player.team,
            role=player.role,
            purchased_at=purchased_at,
        )
        self._store.state.ownerships[key] = ownership
        return _copy(ownership)

    async def remove_ownership(
        self, db: object, user_id: str, league_id: str, player_id: str
    ) -> bool:
        return self._store.state.ownerships.pop((user_id, league_id, player_id), None) is not None


class FakeLineupRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def upsert_slot(self, db: object, slot: LineupSlot) -> LineupSlot:
        key = (slot.user_id, slot.league_id, slot.position, slot.matchday)
        self._store.state.slots[key] = _copy(slot)
        return _copy(slot)

    async def list_slots(
        self, db: object, user_id: str, league_id: str, matchday: int
    ) -> list[LineupSlot]:
        return [
            _copy(s)
            for (uid, lid, _, md), s in self._store.state.slots.items()
            if uid == user_id and lid == league_id and md == matchday
        ]

    async def remove_player_slots(
        self, db: object, user_id: str, league_id: str, player_id: str
    ) -> int:
        slots = self._store.state.slots
        doomed = [
            key
            for key, s in slots.items()
            if s.user_id == user_id and s.league_id == league_id and s.player_id == player_id
        ]
        for key in doomed:
            del slots[key]
        return len(doomed)


class FakeOfferRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def create_offer(self, db: object, offer: Offer) -> Offer:
        self._store.state.offers[offer.id] = _copy(offer)
        return _copy(offer)

    async def get_offer(self, db: object, offer_id: str) -> Offer | None:
        offer = self._store.state.offers.get(offer_id)
        return _copy(offer) if offer else None

    async def get_offer_for_update(self, db: object, offer_id: str) -> Offer | None:
        return await self.get_offer(db, offer_id)

    async def update_status(
        self,
        db: object,
        offer_id: str,
        expected: OfferStatus,
        new_status: OfferStatus,
        resolved_at: datetime,
    ) -> Offer | None:
        offer = self._store.state.offers.get(offer_id)
        if offer is None or offer.status is not expected:
            return None
        offer.status = new_status
        offer.resolved_at = resolved_at
        return _copy(offer)

    async def list_offers(
        self, db: object, league_id: str, user_id: str, statuses: list[OfferStatus] | None
    ) -> list[Offer]:
        rows = [
            o
            for o in self._store.state.offers.values()
            if o.league_id == league_id
            and o.involves(user_id)
            and (statuses is None or o.status in statuses)
        ]
        rows.sort(key=lambda o: (o.expires_at, o.id))
        return [_copy(o) for o in rows]

    async def expire_due(self, db: object, now: datetime) -> list[str]:
        expired = []
        for offer in self._store.state.offers.values():
            if offer.status is OfferStatus.PENDING and offer.expires_at < now:
                offer.status = OfferStatus.EXPIRED
                offer.resolved_at = now
                expired.append(offer.id)
        return expired
