"""Pydantic schemas for fm_lineup API."""

from pydantic import BaseModel, Field

from src.fm_lineup.domain.models import DEFAULT_MATCHDAY
from src.fm_reference.application.schemas import PlayerOut


class SetStarterRequest(BaseModel):
    player_id: str = Field(..., min_length=1, max_length=64)
    position: str = Field(..., min_length=1, max_length=16)
    matchday: int = Field(DEFAULT_MATCHDAY, ge=1)


class LineupEntry(BaseModel):
    position: str
    player_id: str
    player: PlayerOut | None  # None when the reference source no longer lists the player


class LineupResponse(BaseModel):
    league_id: str
    user_id: str
    matchday: int
    items: list[LineupEntry]
