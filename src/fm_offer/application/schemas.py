"""Pydantic schemas for fm_offer API."""

from pydantic import BaseModel, Field

from src.fm_common.money import millions_to_display
from src.fm_offer.domain.models import Offer
from src.fm_reference.application.schemas import PlayerOut
from src.fm_reference.domain.models import PlayerRef

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateOfferRequest(BaseModel):
    player_id: str = Field(..., min_length=1, max_length=64)
    buyer_user_id: str = Field(..., min_length=1, max_length=64)
    price: int = Field(..., description="Millions; at least 1")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class OfferOut(BaseModel):
    id: str
    league_id: str
    player_id: str
    player: PlayerOut | None
    seller_user_id: str
    buyer_user_id: str
    price: int
    price_display: str
    status: str
    created_at: str  # ISO8601 string
    expires_at: str  # ISO8601 string
    resolved_at: str | None

    @classmethod
    def from_domain(cls, offer: Offer, player: PlayerRef | None = None) -> "OfferOut":
        return cls(
            id=offer.id,
            league_id=offer.league_id,
            player_id=offer.player_id,
            player=PlayerOut.from_domain(player) if player else None,
            seller_user_id=offer.seller_user_id,
            buyer_user_id=offer.buyer_user_id,
            price=offer.price,
            price_display=millions_to_display(offer.price),
            status=offer.status.value,
            created_at=offer.created_at.isoformat(),
            expires_at=offer.expires_at.isoformat(),
            resolved_at=offer.resolved_at.isoformat() if offer.resolved_at else None,
        )


class AcceptOfferResponse(BaseModel):
    offer: OfferOut
    buyer_money: int
    buyer_money_display: str
    seller_money: int
    lineup_slots_cleared: int


class OfferListResponse(BaseModel):
    league_id: str
    user_id: str
    incoming: list[OfferOut]  # user is the buyer
    outgoing: list[OfferOut]  # user is the seller
