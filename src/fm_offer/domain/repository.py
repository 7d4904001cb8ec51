"""Repository Protocol — dependency inversion for testability.

Unit tests inject an implementation that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.enums import OfferStatus
from src.fm_offer.domain.models import Offer


class OfferRepositoryProtocol(Protocol):
    async def create_offer(self, db: AsyncSession, offer: Offer) -> Offer: ...

    async def get_offer(self, db: AsyncSession, offer_id: str) -> Offer | None: ...

    async def get_offer_for_update(
        self, db: AsyncSession, offer_id: str
    ) -> Offer | None:
        """SELECT ... FOR UPDATE; serializes concurrent accept/reject."""
        ...

    async def update_status(
        self,
        db: AsyncSession,
        offer_id: str,
        expected: OfferStatus,
        new_status: OfferStatus,
        resolved_at: datetime,
    ) -> Offer | None:
        """Compare-and-set; returns None when the offer was not in ``expected``."""
        ...

    async def list_offers(
        self,
        db: AsyncSession,
        league_id: str,
        user_id: str,
        statuses: list[OfferStatus] | None,
    ) -> list[Offer]:
        """Offers where the user is buyer or seller, soonest expiry first."""
        ...

    async def expire_due(self, db: AsyncSession, now: datetime) -> list[str]:
        """Mark every overdue pending offer expired; returns their ids."""
        ...
