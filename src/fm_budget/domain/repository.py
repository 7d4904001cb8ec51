"""Repository Protocol — dependency inversion for testability.

Unit tests inject an implementation that conforms to this Protocol.
Infrastructure layer provides the real implementation.

Balances are only ever changed through ``debit`` / ``credit``, called by the
roster and offer services inside their own transaction.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_budget.domain.models import BudgetAccount, TransactionEntry


class BudgetRepositoryProtocol(Protocol):
    async def get_account(
        self, db: AsyncSession, user_id: str, league_id: str
    ) -> BudgetAccount | None: ...

    async def list_accounts(
        self, db: AsyncSession, league_id: str
    ) -> list[BudgetAccount]: ...

    async def open_account(
        self, db: AsyncSession, user_id: str, league_id: str, starting_money: int
    ) -> BudgetAccount: ...

    async def lock_accounts(
        self, db: AsyncSession, league_id: str, user_ids: list[str]
    ) -> dict[str, BudgetAccount]: ...

    async def debit(
        self, db: AsyncSession, user_id: str, league_id: str, amount: int
    ) -> BudgetAccount: ...

    async def credit(
        self, db: AsyncSession, user_id: str, league_id: str, amount: int
    ) -> BudgetAccount: ...

    async def append_entry(
        self, db: AsyncSession, entry: TransactionEntry
    ) -> TransactionEntry: ...

    async def list_entries(
        self,
        db: AsyncSession,
        league_id: str,
        cursor_id: int | None,
        limit: int,
        user_id: str | None,
    ) -> list[TransactionEntry]: ...
