"""Pydantic schemas and cursor utilities for fm_budget API."""

import base64
import json

from pydantic import BaseModel

from src.fm_budget.domain.models import BudgetAccount, TransactionEntry
from src.fm_common.money import millions_to_display

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.urlsafe_b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.urlsafe_b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BudgetResponse(BaseModel):
    user_id: str
    league_id: str
    money: int
    money_display: str

    @classmethod
    def from_domain(cls, account: BudgetAccount) -> "BudgetResponse":
        return cls(
            user_id=account.user_id,
            league_id=account.league_id,
            money=account.money,
            money_display=millions_to_display(account.money),
        )


class TransactionItem(BaseModel):
    id: int
    entry_type: str
    user_id: str
    counterparty_user_id: str | None
    player_id: str
    player_name: str | None
    player_team: str | None
    player_role: str | None
    amount: int
    amount_display: str
    balance_after: int
    reference_id: str | None
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, entry: TransactionEntry) -> "TransactionItem":
        return cls(
            id=entry.id or 0,
            entry_type=entry.entry_type,
            user_id=entry.user_id,
            counterparty_user_id=entry.counterparty_user_id,
            player_id=entry.player_id,
            player_name=entry.player_name,
            player_team=entry.player_team,
            player_role=entry.player_role,
            amount=entry.amount,
            amount_display=millions_to_display(entry.amount),
            balance_after=entry.balance_after,
            reference_id=entry.reference_id,
            created_at=entry.created_at.isoformat() if entry.created_at else "",
        )


class TransactionListResponse(BaseModel):
    items: list[TransactionItem]
    next_cursor: str | None
    has_more: bool
