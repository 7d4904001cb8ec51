"""Offer domain model — pure dataclass, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.fm_common.enums import OfferStatus


@dataclass
class Offer:
    id: str
    league_id: str
    player_id: str
    seller_user_id: str
    buyer_user_id: str
    price: int                      # millions, >= 1
    status: OfferStatus
    created_at: datetime
    expires_at: datetime
    resolved_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is OfferStatus.PENDING

    def is_overdue(self, now: datetime) -> bool:
        """Past its deadline while still pending (strictly after expires_at)."""
        return self.is_pending and now > self.expires_at

    def involves(self, user_id: str) -> bool:
        return user_id in (self.seller_user_id, self.buyer_user_id)
