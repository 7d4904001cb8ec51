"""Pydantic schemas for fm_roster API."""

from pydantic import BaseModel, Field

from src.fm_reference.application.schemas import PlayerOut

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BuyPlayerRequest(BaseModel):
    player_id: str = Field(..., min_length=1, max_length=64)


class SellPlayerRequest(BaseModel):
    player_id: str = Field(..., min_length=1, max_length=64)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PurchaseResponse(BaseModel):
    player: PlayerOut
    price: int
    money: int
    money_display: str
    transaction_id: int | None


class SaleResponse(BaseModel):
    player_id: str
    sell_price: int
    money: int
    money_display: str
    lineup_slots_cleared: int
    transaction_id: int | None


class RosterPlayer(PlayerOut):
    purchased_at: str  # ISO8601 string


class RosterResponse(BaseModel):
    league_id: str
    user_id: str
    count: int
    items: list[RosterPlayer]
