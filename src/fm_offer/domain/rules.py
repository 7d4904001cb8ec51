"""Offer rules — pure functions, raise AppError subclasses on violation.

Transitions: pending → accepted | rejected | expired. Every other status is
terminal. Authorization and expiry are evaluated before pending-ness so a
stale offer reports why it cannot be acted upon.
"""

from src.fm_common.errors import (
    InvalidOfferError,
    NotAuthorizedForOfferError,
    OfferNotPendingError,
)
from src.fm_offer.domain.models import Offer

MIN_OFFER_PRICE = 1


def check_new_offer(seller_user_id: str, buyer_user_id: str, price: int) -> None:
    if seller_user_id == buyer_user_id:
        raise InvalidOfferError(
            "seller and buyer must be different users",
            {"seller_user_id": seller_user_id, "buyer_user_id": buyer_user_id},
        )
    if price < MIN_OFFER_PRICE:
        raise InvalidOfferError(
            f"price must be at least {MIN_OFFER_PRICE}M, got {price}",
            {"price": price, "min_price": MIN_OFFER_PRICE},
        )


def check_can_accept(offer: Offer, acting_user_id: str) -> None:
    """Only the designated buyer may accept."""
    if acting_user_id != offer.buyer_user_id:
        raise NotAuthorizedForOfferError(offer.id, acting_user_id, "accept")


def check_can_reject(offer: Offer, acting_user_id: str) -> None:
    """Either party may reject."""
    if not offer.involves(acting_user_id):
        raise NotAuthorizedForOfferError(offer.id, acting_user_id, "reject")


def check_pending(offer: Offer) -> None:
    if offer.status.is_terminal:
        raise OfferNotPendingError(offer.id, offer.status.value)
