"""Repository Protocol for league membership."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_league.domain.models import LeagueMember


class LeagueRepositoryProtocol(Protocol):
    async def add_member(
        self, db: AsyncSession, league_id: str, user_id: str
    ) -> LeagueMember: ...

    async def is_member(
        self, db: AsyncSession, league_id: str, user_id: str
    ) -> bool: ...

    async def list_members(
        self, db: AsyncSession, league_id: str
    ) -> list[LeagueMember]: ...
