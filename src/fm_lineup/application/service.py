"""LineupApplicationService — set a starter, read the lineup.

A starter must be owned by the caller and its canonical role must equal the
requested position. Positions arrive in any accepted spelling ("bottom",
"ADC", ...) and are normalized before comparison.

set_starter takes the same budget-row lock as buy, sell and trade accept, so
the ownership it reads cannot be transferred away before the slot is written.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_budget.domain.repository import BudgetRepositoryProtocol
from src.fm_budget.infrastructure.persistence import BudgetRepository
from src.fm_common.errors import NotOwnedError, PlayerNotFoundError, PositionMismatchError
from src.fm_lineup.application.schemas import LineupEntry, LineupResponse
from src.fm_lineup.domain.models import DEFAULT_MATCHDAY, Lineup, LineupSlot
from src.fm_lineup.domain.repository import LineupRepositoryProtocol
from src.fm_lineup.infrastructure.persistence import LineupRepository
from src.fm_reference.application.lookup import resolve_players
from src.fm_reference.application.schemas import PlayerOut
from src.fm_reference.domain.normalize import parse_position
from src.fm_reference.domain.provider import PlayerProviderProtocol
from src.fm_reference.infrastructure.factory import get_player_provider
from src.fm_roster.domain.repository import RosterRepositoryProtocol
from src.fm_roster.infrastructure.persistence import RosterRepository

logger = logging.getLogger("fm.lineup")


class LineupApplicationService:
    def __init__(
        self,
        repo: LineupRepositoryProtocol | None = None,
        roster_repo: RosterRepositoryProtocol | None = None,
        budget_repo: BudgetRepositoryProtocol | None = None,
        provider: PlayerProviderProtocol | None = None,
    ) -> None:
        self._repo: LineupRepositoryProtocol = repo or LineupRepository()
        self._roster_repo: RosterRepositoryProtocol = roster_repo or RosterRepository()
        self._budget_repo: BudgetRepositoryProtocol = budget_repo or BudgetRepository()
        self._provider = provider

    @property
    def provider(self) -> PlayerProviderProtocol:
        return self._provider or get_player_provider()

    async def set_starter(
        self,
        db: AsyncSession,
        user_id: str,
        league_id: str,
        player_id: str,
        position: str,
        matchday: int = DEFAULT_MATCHDAY,
    ) -> LineupResponse:
        role = parse_position(position)
        try:
            await self._budget_repo.lock_accounts(db, league_id, [user_id])
            if await self._roster_repo.get_ownership(db, user_id, league_id, player_id) is None:
                raise NotOwnedError(user_id, player_id, league_id)
            player = await self.provider.lookup_player(player_id)
            if player is None:
                raise PlayerNotFoundError(player_id)
            if player.role != role:
                raise PositionMismatchError(player_id, player.role.value, role.value)

            await self._repo.upsert_slot(
                db,
                LineupSlot(
                    user_id=user_id,
                    league_id=league_id,
                    position=role,
                    matchday=matchday,
                    player_id=player_id,
                ),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "user %s set %s as %s for matchday %d in league %s",
            user_id, player_id, role.value, matchday, league_id,
        )
        return await self.get_lineup(db, user_id, league_id, matchday)

    async def get_lineup(
        self,
        db: AsyncSession,
        user_id: str,
        league_id: str,
        matchday: int = DEFAULT_MATCHDAY,
    ) -> LineupResponse:
        slots = await self._repo.list_slots(db, user_id, league_id, matchday)
        lineup = Lineup.from_slots(user_id, league_id, matchday, slots)
        occupied = lineup.occupied()
        players = await resolve_players(self.provider, (pid for _, pid in occupied))
        items = [
            LineupEntry(
                position=role.value,
                player_id=pid,
                player=PlayerOut.from_domain(players[pid]) if pid in players else None,
            )
            for role, pid in occupied
        ]
        return LineupResponse(
            league_id=league_id, user_id=user_id, matchday=matchday, items=items
        )
