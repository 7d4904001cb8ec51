"""OfferApplicationService — bilateral trade proposals.

An offer never reserves the player: the seller may sell or trade it away
while the offer is pending, so every precondition is checked again at
acceptance. Acceptance is one DB transaction that locks the offer row, then
both budget rows in ascending user_id order, and settles ownership, lineup,
money and the transaction log together.

Expiry is lazy. An overdue pending offer touched by accept, reject or a
listing is marked ``expired`` and committed on the spot; ``expire_overdue``
does the same for every overdue offer and may be run periodically.
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fm_budget.domain.models import TransactionEntry
from src.fm_budget.domain.repository import BudgetRepositoryProtocol
from src.fm_budget.infrastructure.persistence import BudgetRepository
from src.fm_common.datetime_utils import hours_from, utc_now
from src.fm_common.enums import OfferStatus, TransactionType
from src.fm_common.errors import (
    InsufficientFundsError,
    NotOwnedError,
    NotParticipantError,
    OfferExpiredError,
    OfferNotFoundError,
    OfferNotPendingError,
    PlayerNotFoundError,
    SellerNoLongerOwnsError,
)
from src.fm_common.id_generator import generate_offer_id
from src.fm_common.money import millions_to_display
from src.fm_league.domain.repository import LeagueRepositoryProtocol
from src.fm_league.infrastructure.persistence import LeagueRepository
from src.fm_lineup.domain.repository import LineupRepositoryProtocol
from src.fm_lineup.infrastructure.persistence import LineupRepository
from src.fm_offer.application.schemas import (
    AcceptOfferResponse,
    OfferListResponse,
    OfferOut,
)
from src.fm_offer.domain.models import Offer
from src.fm_offer.domain.repository import OfferRepositoryProtocol
from src.fm_offer.domain.rules import (
    check_can_accept,
    check_can_reject,
    check_new_offer,
    check_pending,
)
from src.fm_offer.infrastructure.persistence import OfferRepository
from src.fm_reference.application.lookup import resolve_players
from src.fm_reference.domain.provider import PlayerProviderProtocol
from src.fm_reference.infrastructure.factory import get_player_provider
from src.fm_roster.domain.repository import RosterRepositoryProtocol
from src.fm_roster.domain.rules import check_acquisition
from src.fm_roster.infrastructure.persistence import RosterRepository

logger = logging.getLogger("fm.offer")


class OfferApplicationService:
    def __init__(
        self,
        repo: OfferRepositoryProtocol | None = None,
        roster_repo: RosterRepositoryProtocol | None = None,
        budget_repo: BudgetRepositoryProtocol | None = None,
        lineup_repo: LineupRepositoryProtocol | None = None,
        league_repo: LeagueRepositoryProtocol | None = None,
        provider: PlayerProviderProtocol | None = None,
        offer_ttl_hours: int | None = None,
        enforce_roster_caps: bool | None = None,
    ) -> None:
        self._repo: OfferRepositoryProtocol = repo or OfferRepository()
        self._roster_repo: RosterRepositoryProtocol = roster_repo or RosterRepository()
        self._budget_repo: BudgetRepositoryProtocol = budget_repo or BudgetRepository()
        self._lineup_repo: LineupRepositoryProtocol = lineup_repo or LineupRepository()
        self._league_repo: LeagueRepositoryProtocol = league_repo or LeagueRepository()
        self._provider = provider
        self._ttl_hours = (
            offer_ttl_hours if offer_ttl_hours is not None else settings.OFFER_TTL_HOURS
        )
        self._enforce_caps = (
            enforce_roster_caps
            if enforce_roster_caps is not None
            else settings.ENFORCE_ROSTER_CAPS_ON_TRADE
        )

    @property
    def provider(self) -> PlayerProviderProtocol:
        return self._provider or get_player_provider()

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    async def create(
        self,
        db: AsyncSession,
        seller_user_id: str,
        league_id: str,
        player_id: str,
        buyer_user_id: str,
        price: int,
    ) -> OfferOut:
        check_new_offer(seller_user_id, buyer_user_id, price)
        try:
            if await self._roster_repo.get_ownership(
                db, seller_user_id, league_id, player_id
            ) is None:
                raise NotOwnedError(seller_user_id, player_id, league_id)
            if not await self._league_repo.is_member(db, league_id, buyer_user_id):
                raise NotParticipantError(buyer_user_id, league_id)
            player = await self.provider.lookup_player(player_id)
            if player is None:
                raise PlayerNotFoundError(player_id)

            now = utc_now()
            offer = await self._repo.create_offer(
                db,
                Offer(
                    id=generate_offer_id(),
                    league_id=league_id,
                    player_id=player_id,
                    seller_user_id=seller_user_id,
                    buyer_user_id=buyer_user_id,
                    price=price,
                    status=OfferStatus.PENDING,
                    created_at=now,
                    expires_at=hours_from(now, self._ttl_hours),
                ),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "offer %s: %s offers %s to %s for %dM in league %s",
            offer.id, seller_user_id, player_id, buyer_user_id, price, league_id,
        )
        return OfferOut.from_domain(offer, player)

    # ------------------------------------------------------------------
    # accept / reject
    # ------------------------------------------------------------------

    async def accept(
        self, db: AsyncSession, offer_id: str, acting_user_id: str
    ) -> AcceptOfferResponse:
        now = utc_now()
        try:
            offer = await self._load_actionable(db, offer_id, now, acting_user_id, "accept")
            buyer_id, seller_id = offer.buyer_user_id, offer.seller_user_id
            league_id, player_id = offer.league_id, offer.player_id

            locked = await self._budget_repo.lock_accounts(db, league_id, [buyer_id, seller_id])
            if not locked[buyer_id].can_afford(offer.price):
                raise InsufficientFundsError(offer.price, locked[buyer_id].money)
            if await self._roster_repo.get_ownership(db, seller_id, league_id, player_id) is None:
                raise SellerNoLongerOwnsError(offer.id, seller_id, player_id)
            player = await self.provider.lookup_player(player_id)
            if player is None:
                raise PlayerNotFoundError(player_id)
            if self._enforce_caps:
                held = await self._roster_repo.list_ownerships(db, buyer_id, league_id)
                check_acquisition(player, league_id, held)

            await self._roster_repo.remove_ownership(db, seller_id, league_id, player_id)
            cleared = await self._lineup_repo.remove_player_slots(
                db, seller_id, league_id, player_id
            )
            await self._roster_repo.add_ownership(db, buyer_id, league_id, player, now)
            buyer_account = await self._budget_repo.debit(db, buyer_id, league_id, offer.price)
            seller_account = await self._budget_repo.credit(
                db, seller_id, league_id, offer.price
            )
            await self._budget_repo.append_entry(
                db,
                TransactionEntry.for_player(
                    TransactionType.TRADE_BUY, league_id, buyer_id, player,
                    amount=-offer.price, balance_after=buyer_account.money,
                    counterparty_user_id=seller_id, reference_id=offer.id,
                ),
            )
            await self._budget_repo.append_entry(
                db,
                TransactionEntry.for_player(
                    TransactionType.TRADE_SELL, league_id, seller_id, player,
                    amount=offer.price, balance_after=seller_account.money,
                    counterparty_user_id=buyer_id, reference_id=offer.id,
                ),
            )
            settled = await self._repo.update_status(
                db, offer.id, OfferStatus.PENDING, OfferStatus.ACCEPTED, now
            )
            if settled is None:
                raise OfferNotPendingError(offer.id, offer.status.value)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "offer %s accepted: %s -> %s, %s for %dM in league %s",
            offer.id, seller_id, buyer_id, player_id, offer.price, league_id,
        )
        return AcceptOfferResponse(
            offer=OfferOut.from_domain(settled, player),
            buyer_money=buyer_account.money,
            buyer_money_display=millions_to_display(buyer_account.money),
            seller_money=seller_account.money,
            lineup_slots_cleared=cleared,
        )

    async def reject(
        self, db: AsyncSession, offer_id: str, acting_user_id: str
    ) -> OfferOut:
        now = utc_now()
        try:
            offer = await self._load_actionable(db, offer_id, now, acting_user_id, "reject")
            rejected = await self._repo.update_status(
                db, offer.id, OfferStatus.PENDING, OfferStatus.REJECTED, now
            )
            if rejected is None:
                raise OfferNotPendingError(offer.id, offer.status.value)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("offer %s rejected by %s", offer.id, acting_user_id)
        return OfferOut.from_domain(rejected)

    async def _load_actionable(
        self,
        db: AsyncSession,
        offer_id: str,
        now: datetime,
        acting_user_id: str,
        action: str,
    ) -> Offer:
        """Lock the offer and verify the caller may act on it now.

        An overdue offer is marked expired and committed before
        OfferExpiredError is raised, so the expiry survives the caller's
        rollback.
        """
        offer = await self._repo.get_offer_for_update(db, offer_id)
        if offer is None:
            raise OfferNotFoundError(offer_id)
        if action == "accept":
            check_can_accept(offer, acting_user_id)
        else:
            check_can_reject(offer, acting_user_id)
        if offer.is_overdue(now):
            await self._repo.update_status(
                db, offer.id, OfferStatus.PENDING, OfferStatus.EXPIRED, now
            )
            await db.commit()
            logger.info("offer %s expired at %s", offer.id, offer.expires_at.isoformat())
            raise OfferExpiredError(offer.id, offer.expires_at.isoformat())
        check_pending(offer)
        return offer

    # ------------------------------------------------------------------
    # reads and expiry
    # ------------------------------------------------------------------

    async def list_offers(
        self,
        db: AsyncSession,
        user_id: str,
        league_id: str,
        status: str | None = None,
    ) -> OfferListResponse:
        now = utc_now()
        statuses = [OfferStatus.parse(status)] if status else None

        # Settle lazy expiry first so the status filter below sees it
        pending = await self._repo.list_offers(db, league_id, user_id, [OfferStatus.PENDING])
        overdue = [o for o in pending if o.is_overdue(now)]
        if overdue:
            try:
                for offer in overdue:
                    await self._repo.update_status(
                        db, offer.id, OfferStatus.PENDING, OfferStatus.EXPIRED, now
                    )
                await db.commit()
            except Exception:
                await db.rollback()
                raise

        offers = await self._repo.list_offers(db, league_id, user_id, statuses)
        players = await resolve_players(self.provider, (o.player_id for o in offers))
        incoming = [
            OfferOut.from_domain(o, players.get(o.player_id))
            for o in offers
            if o.buyer_user_id == user_id
        ]
        outgoing = [
            OfferOut.from_domain(o, players.get(o.player_id))
            for o in offers
            if o.seller_user_id == user_id
        ]
        return OfferListResponse(
            league_id=league_id, user_id=user_id, incoming=incoming, outgoing=outgoing
        )

    async def expire_overdue(
        self, db: AsyncSession, now: datetime | None = None
    ) -> list[str]:
        """Mark every overdue pending offer expired. Idempotent."""
        try:
            expired = await self._repo.expire_due(db, now or utc_now())
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        if expired:
            logger.info("expired %d overdue offers", len(expired))
        return expired
