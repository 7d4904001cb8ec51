"""RosterApplicationService — buy and sell against the market.

Each mutation is one DB transaction: the caller's budget row is locked
first (serializing every roster change of that user in that league), the
rules run on a snapshot read under that lock, then Ownership, Budget,
Lineup and the transaction log are written together and committed. Any
failure rolls the whole unit back.

The player's price is read once per operation from the provider and that
snapshot is used for the check, the debit/credit and the log entry.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_budget.domain.models import TransactionEntry
from src.fm_budget.domain.repository import BudgetRepositoryProtocol
from src.fm_budget.infrastructure.persistence import BudgetRepository
from src.fm_common.datetime_utils import utc_now
from src.fm_common.enums import TransactionType
from src.fm_common.errors import (
    InsufficientFundsError,
    NotOwnedError,
    PlayerNotFoundError,
)
from src.fm_common.money import market_sell_price, millions_to_display
from src.fm_lineup.domain.repository import LineupRepositoryProtocol
from src.fm_lineup.infrastructure.persistence import LineupRepository
from src.fm_reference.application.lookup import resolve_players
from src.fm_reference.application.schemas import PlayerOut
from src.fm_reference.domain.provider import PlayerProviderProtocol
from src.fm_reference.infrastructure.factory import get_player_provider
from src.fm_roster.application.schemas import (
    PurchaseResponse,
    RosterPlayer,
    RosterResponse,
    SaleResponse,
)
from src.fm_roster.domain.repository import RosterRepositoryProtocol
from src.fm_roster.domain.rules import check_acquisition
from src.fm_roster.infrastructure.persistence import RosterRepository

logger = logging.getLogger("fm.roster")


class RosterApplicationService:
    def __init__(
        self,
        repo: RosterRepositoryProtocol | None = None,
        budget_repo: BudgetRepositoryProtocol | None = None,
        lineup_repo: LineupRepositoryProtocol | None = None,
        provider: PlayerProviderProtocol | None = None,
    ) -> None:
        self._repo: RosterRepositoryProtocol = repo or RosterRepository()
        self._budget_repo: BudgetRepositoryProtocol = budget_repo or BudgetRepository()
        self._lineup_repo: LineupRepositoryProtocol = lineup_repo or LineupRepository()
        self._provider = provider

    @property
    def provider(self) -> PlayerProviderProtocol:
        return self._provider or get_player_provider()

    async def buy(
        self, db: AsyncSession, user_id: str, league_id: str, player_id: str
    ) -> PurchaseResponse:
        player = await self.provider.lookup_player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        price = player.price

        try:
            locked = await self._budget_repo.lock_accounts(db, league_id, [user_id])
            account = locked[user_id]

            held = await self._repo.list_ownerships(db, user_id, league_id)
            check_acquisition(player, league_id, held)
            if not account.can_afford(price):
                raise InsufficientFundsError(price, account.money)

            await self._repo.add_ownership(db, user_id, league_id, player, utc_now())
            account = await self._budget_repo.debit(db, user_id, league_id, price)
            entry = await self._budget_repo.append_entry(
                db,
                TransactionEntry.for_player(
                    TransactionType.PURCHASE, league_id, user_id, player,
                    amount=-price, balance_after=account.money,
                ),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "user %s bought %s in league %s for %dM (balance %dM)",
            user_id, player_id, league_id, price, account.money,
        )
        return PurchaseResponse(
            player=PlayerOut.from_domain(player),
            price=price,
            money=account.money,
            money_display=millions_to_display(account.money),
            transaction_id=entry.id,
        )

    async def sell(
        self, db: AsyncSession, user_id: str, league_id: str, player_id: str
    ) -> SaleResponse:
        try:
            await self._budget_repo.lock_accounts(db, league_id, [user_id])
            if await self._repo.get_ownership(db, user_id, league_id, player_id) is None:
                raise NotOwnedError(user_id, player_id, league_id)
            player = await self.provider.lookup_player(player_id)
            if player is None:
                raise PlayerNotFoundError(player_id)
            sell_price = market_sell_price(player.price)

            await self._repo.remove_ownership(db, user_id, league_id, player_id)
            cleared = await self._lineup_repo.remove_player_slots(
                db, user_id, league_id, player_id
            )
            account = await self._budget_repo.credit(db, user_id, league_id, sell_price)
            entry = await self._budget_repo.append_entry(
                db,
                TransactionEntry.for_player(
                    TransactionType.SALE, league_id, user_id, player,
                    amount=sell_price, balance_after=account.money,
                ),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "user %s sold %s in league %s for %dM (balance %dM, %d lineup slots cleared)",
            user_id, player_id, league_id, sell_price, account.money, cleared,
        )
        return SaleResponse(
            player_id=player_id,
            sell_price=sell_price,
            money=account.money,
            money_display=millions_to_display(account.money),
            lineup_slots_cleared=cleared,
            transaction_id=entry.id,
        )

    async def list_roster(
        self, db: AsyncSession, user_id: str, league_id: str
    ) -> RosterResponse:
        owned = await self._repo.list_ownerships(db, user_id, league_id)
        players = await resolve_players(self.provider, (o.player_id for o in owned))
        items = [
            RosterPlayer(
                **PlayerOut.from_domain(players[o.player_id]).model_dump(),
                purchased_at=o.purchased_at.isoformat() if o.purchased_at else "",
            )
            for o in owned
            if o.player_id in players
        ]
        return RosterResponse(
            league_id=league_id, user_id=user_id, count=len(owned), items=items
        )

