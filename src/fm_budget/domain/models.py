"""Domain models for fm_budget — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.fm_common.enums import TransactionType
from src.fm_reference.domain.models import PlayerRef


@dataclass
class BudgetAccount:
    user_id: str
    league_id: str
    money: int               # millions, never negative
    version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def can_afford(self, amount: int) -> bool:
        return 0 <= amount <= self.money


@dataclass
class TransactionEntry:
    """One leg of a roster-changing money movement. Append-only."""

    league_id: str
    user_id: str
    entry_type: str                  # TransactionType value
    amount: int                      # millions, positive=income negative=expense
    balance_after: int               # millions, money snapshot after the op
    player_id: str
    player_name: str | None = None
    player_team: str | None = None
    player_role: str | None = None
    counterparty_user_id: str | None = None
    reference_id: str | None = None  # offer id for trade legs
    id: int | None = None            # BIGSERIAL, assigned on insert
    created_at: datetime | None = None

    @classmethod
    def for_player(
        cls,
        entry_type: TransactionType,
        league_id: str,
        user_id: str,
        player: PlayerRef,
        amount: int,
        balance_after: int,
        counterparty_user_id: str | None = None,
        reference_id: str | None = None,
    ) -> "TransactionEntry":
        """Build an entry that snapshots the player's display data."""
        return cls(
            league_id=league_id,
            user_id=user_id,
            entry_type=entry_type.value,
            amount=amount,
            balance_after=balance_after,
            player_id=player.id,
            player_name=player.name,
            player_team=player.team,
            player_role=player.role.value,
            counterparty_user_id=counterparty_user_id,
            reference_id=reference_id,
        )
