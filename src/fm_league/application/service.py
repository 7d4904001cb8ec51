"""LeagueApplicationService — membership and joining.

Joining inserts the membership row and opens the budget account in the
same transaction, mirroring how a new participant appears in a league.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fm_budget.domain.repository import BudgetRepositoryProtocol
from src.fm_budget.infrastructure.persistence import BudgetRepository
from src.fm_common.errors import NotParticipantError
from src.fm_common.money import millions_to_display
from src.fm_league.application.schemas import (
    JoinLeagueResponse,
    MemberItem,
    MemberListResponse,
)
from src.fm_league.domain.repository import LeagueRepositoryProtocol
from src.fm_league.infrastructure.persistence import LeagueRepository

logger = logging.getLogger("fm.league")


class LeagueApplicationService:
    def __init__(
        self,
        repo: LeagueRepositoryProtocol | None = None,
        budget_repo: BudgetRepositoryProtocol | None = None,
        starting_budget: int | None = None,
    ) -> None:
        self._repo: LeagueRepositoryProtocol = repo or LeagueRepository()
        self._budget_repo: BudgetRepositoryProtocol = budget_repo or BudgetRepository()
        self._starting_budget = (
            starting_budget if starting_budget is not None else settings.STARTING_BUDGET
        )

    async def join_league(
        self, db: AsyncSession, user_id: str, league_id: str
    ) -> JoinLeagueResponse:
        try:
            member = await self._repo.add_member(db, league_id, user_id)
            account = await self._budget_repo.open_account(
                db, user_id, league_id, self._starting_budget
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("user %s joined league %s with %dM", user_id, league_id, account.money)
        return JoinLeagueResponse(
            league_id=league_id,
            user_id=user_id,
            money=account.money,
            money_display=millions_to_display(account.money),
            joined_at=member.joined_at.isoformat() if member.joined_at else "",
        )

    async def require_participant(
        self, db: AsyncSession, user_id: str, league_id: str
    ) -> None:
        if not await self._repo.is_member(db, league_id, user_id):
            raise NotParticipantError(user_id, league_id)

    async def list_members(self, db: AsyncSession, league_id: str) -> MemberListResponse:
        members = await self._repo.list_members(db, league_id)
        accounts = await self._budget_repo.list_accounts(db, league_id)
        balances = {a.user_id: a.money for a in accounts}
        items = [
            MemberItem(
                user_id=m.user_id,
                money=balances.get(m.user_id, 0),
                money_display=millions_to_display(balances.get(m.user_id, 0)),
                joined_at=m.joined_at.isoformat() if m.joined_at else "",
            )
            for m in members
        ]
        return MemberListResponse(league_id=league_id, items=items)
