"""BudgetRepository — concrete implementation of BudgetRepositoryProtocol.

All balance-mutating operations use atomic PostgreSQL UPDATE ... RETURNING.
A debit that returns 0 rows means the sufficiency check failed; the
CHECK (money >= 0) constraint is the last line behind it.

Transaction ownership: The CALLER (application service) is responsible for
committing or rolling back the session.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_budget.domain.models import BudgetAccount, TransactionEntry
from src.fm_common.errors import (
    AlreadyParticipantError,
    BudgetAccountNotFoundError,
    InsufficientFundsError,
    InternalError,
)

# ---------------------------------------------------------------------------
# SQL: budget_accounts
# ---------------------------------------------------------------------------

_ACCOUNT_COLUMNS = "user_id, league_id, money, version, created_at, updated_at"

_GET_ACCOUNT_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM budget_accounts
    WHERE user_id = :user_id AND league_id = :league_id
""")

_LOCK_ACCOUNT_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM budget_accounts
    WHERE user_id = :user_id AND league_id = :league_id
    FOR UPDATE
""")

_LIST_ACCOUNTS_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM budget_accounts
    WHERE league_id = :league_id
    ORDER BY money DESC, user_id
""")

_OPEN_ACCOUNT_SQL = text(f"""
    INSERT INTO budget_accounts (user_id, league_id, money)
    VALUES (:user_id, :league_id, :money)
    ON CONFLICT (user_id, league_id) DO NOTHING
    RETURNING {_ACCOUNT_COLUMNS}
""")

_DEBIT_SQL = text(f"""
    UPDATE budget_accounts
    SET money = money - :amount,
        version = version + 1
    WHERE user_id = :user_id AND league_id = :league_id AND money >= :amount
    RETURNING {_ACCOUNT_COLUMNS}
""")

_CREDIT_SQL = text(f"""
    UPDATE budget_accounts
    SET money = money + :amount,
        version = version + 1
    WHERE user_id = :user_id AND league_id = :league_id
    RETURNING {_ACCOUNT_COLUMNS}
""")

# ---------------------------------------------------------------------------
# SQL: transactions (append-only)
# ---------------------------------------------------------------------------

_ENTRY_COLUMNS = """id, league_id, user_id, entry_type, amount, balance_after,
              player_id, player_name, player_team, player_role,
              counterparty_user_id, reference_id, created_at"""

_INSERT_ENTRY_SQL = text(f"""
    INSERT INTO transactions
        (league_id, user_id, entry_type, amount, balance_after,
         player_id, player_name, player_team, player_role,
         counterparty_user_id, reference_id)
    VALUES
        (:league_id, :user_id, :entry_type, :amount, :balance_after,
         :player_id, :player_name, :player_team, :player_role,
         :counterparty_user_id, :reference_id)
    RETURNING {_ENTRY_COLUMNS}
""")

_LIST_ENTRIES_SQL = text(f"""
    SELECT {_ENTRY_COLUMNS}
    FROM transactions
    WHERE league_id = :league_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
      AND (CAST(:user_id AS TEXT) IS NULL OR user_id = CAST(:user_id AS TEXT))
    ORDER BY id DESC
    LIMIT :limit
""")


def _row_to_account(row: object) -> BudgetAccount:
    return BudgetAccount(
        user_id=row.user_id,  # type: ignore[attr-defined]
        league_id=row.league_id,  # type: ignore[attr-defined]
        money=row.money,  # type: ignore[attr-defined]
        version=row.version,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_entry(row: object) -> TransactionEntry:
    return TransactionEntry(
        id=row.id,  # type: ignore[attr-defined]
        league_id=row.league_id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        entry_type=row.entry_type,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        balance_after=row.balance_after,  # type: ignore[attr-defined]
        player_id=row.player_id,  # type: ignore[attr-defined]
        player_name=row.player_name,  # type: ignore[attr-defined]
        player_team=row.player_team,  # type: ignore[attr-defined]
        player_role=row.player_role,  # type: ignore[attr-defined]
        counterparty_user_id=row.counterparty_user_id,  # type: ignore[attr-defined]
        reference_id=row.reference_id,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class BudgetRepository:
    """Concrete repository — all balance changes atomic at the SQL level."""

    async def get_account(
        self, db: AsyncSession, user_id: str, league_id: str
    ) -> BudgetAccount | None:
        result = await db.execute(
            _GET_ACCOUNT_SQL, {"user_id": user_id, "league_id": league_id}
        )
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def list_accounts(self, db: AsyncSession, league_id: str) -> list[BudgetAccount]:
        result = await db.execute(_LIST_ACCOUNTS_SQL, {"league_id": league_id})
        return [_row_to_account(row) for row in result.fetchall()]

    async def open_account(
        self, db: AsyncSession, user_id: str, league_id: str, starting_money: int
    ) -> BudgetAccount:
        result = await db.execute(
            _OPEN_ACCOUNT_SQL,
            {"user_id": user_id, "league_id": league_id, "money": starting_money},
        )
        row = result.fetchone()
        if row is None:
            raise AlreadyParticipantError(user_id, league_id)
        return _row_to_account(row)

    async def lock_accounts(
        self, db: AsyncSession, league_id: str, user_ids: list[str]
    ) -> dict[str, BudgetAccount]:
        """SELECT ... FOR UPDATE each account in ascending user_id order.

        A fixed lock order keeps two trades between the same pair of users
        from deadlocking.
        """
        locked: dict[str, BudgetAccount] = {}
        for user_id in sorted(set(user_ids)):
            result = await db.execute(
                _LOCK_ACCOUNT_SQL, {"user_id": user_id, "league_id": league_id}
            )
            row = result.fetchone()
            if row is None:
                raise BudgetAccountNotFoundError(user_id, league_id)
            locked[user_id] = _row_to_account(row)
        return locked

    async def debit(
        self, db: AsyncSession, user_id: str, league_id: str, amount: int
    ) -> BudgetAccount:
        if amount < 0:
            raise InternalError(f"Debit amount must be non-negative, got {amount}")
        result = await db.execute(
            _DEBIT_SQL, {"user_id": user_id, "league_id": league_id, "amount": amount}
        )
        row = result.fetchone()
        if row is None:
            account = await self.get_account(db, user_id, league_id)
            if account is None:
                raise BudgetAccountNotFoundError(user_id, league_id)
            raise InsufficientFundsError(amount, account.money)
        return _row_to_account(row)

    async def credit(
        self, db: AsyncSession, user_id: str, league_id: str, amount: int
    ) -> BudgetAccount:
        if amount < 0:
            raise InternalError(f"Credit amount must be non-negative, got {amount}")
        result = await db.execute(
            _CREDIT_SQL, {"user_id": user_id, "league_id": league_id, "amount": amount}
        )
        row = result.fetchone()
        if row is None:
            raise BudgetAccountNotFoundError(user_id, league_id)
        return _row_to_account(row)

    async def append_entry(
        self, db: AsyncSession, entry: TransactionEntry
    ) -> TransactionEntry:
        result = await db.execute(
            _INSERT_ENTRY_SQL,
            {
                "league_id": entry.league_id,
                "user_id": entry.user_id,
                "entry_type": entry.entry_type,
                "amount": entry.amount,
                "balance_after": entry.balance_after,
                "player_id": entry.player_id,
                "player_name": entry.player_name,
                "player_team": entry.player_team,
                "player_role": entry.player_role,
                "counterparty_user_id": entry.counterparty_user_id,
                "reference_id": entry.reference_id,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Transaction insert returned no rows — this should never happen")
        return _row_to_entry(row)

    async def list_entries(
        self,
        db: AsyncSession,
        league_id: str,
        cursor_id: int | None,
        limit: int,
        user_id: str | None,
    ) -> list[TransactionEntry]:
        result = await db.execute(
            _LIST_ENTRIES_SQL,
            {
                "league_id": league_id,
                "cursor_id": cursor_id,
                "user_id": user_id,
                "limit": limit,
            },
        )
        return [_row_to_entry(row) for row in result.fetchall()]
