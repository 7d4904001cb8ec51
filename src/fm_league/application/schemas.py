"""Pydantic schemas for fm_league API."""

from pydantic import BaseModel


class JoinLeagueResponse(BaseModel):
    league_id: str
    user_id: str
    money: int
    money_display: str
    joined_at: str


class MemberItem(BaseModel):
    user_id: str
    money: int
    money_display: str
    joined_at: str


class MemberListResponse(BaseModel):
    league_id: str
    items: list[MemberItem]
