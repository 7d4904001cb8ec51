"""BudgetApplicationService — read side of the Budget Account.

Balances are never changed from here: debits and credits only happen as
part of a purchase, sale or trade (see fm_roster / fm_offer).
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_budget.application.schemas import (
    BudgetResponse,
    TransactionItem,
    TransactionListResponse,
    cursor_decode,
    cursor_encode,
)
from src.fm_budget.domain.repository import BudgetRepositoryProtocol
from src.fm_budget.infrastructure.persistence import BudgetRepository
from src.fm_common.errors import BudgetAccountNotFoundError


class BudgetApplicationService:
    def __init__(self, repo: BudgetRepositoryProtocol | None = None) -> None:
        self._repo: BudgetRepositoryProtocol = repo or BudgetRepository()

    async def get_budget(
        self, db: AsyncSession, user_id: str, league_id: str
    ) -> BudgetResponse:
        account = await self._repo.get_account(db, user_id, league_id)
        if account is None:
            raise BudgetAccountNotFoundError(user_id, league_id)
        return BudgetResponse.from_domain(account)

    async def list_transactions(
        self,
        db: AsyncSession,
        league_id: str,
        cursor: str | None,
        limit: int,
        user_id: str | None = None,
    ) -> TransactionListResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        entries = await self._repo.list_entries(db, league_id, cursor_id, limit + 1, user_id)
        has_more = len(entries) > limit
        page = entries[:limit]
        next_cursor = cursor_encode(page[-1].id) if has_more and page and page[-1].id else None
        return TransactionListResponse(
            items=[TransactionItem.from_domain(e) for e in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
