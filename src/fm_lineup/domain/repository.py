"""Repository Protocol for lineup slots."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_lineup.domain.models import LineupSlot


class LineupRepositoryProtocol(Protocol):
    async def upsert_slot(self, db: AsyncSession, slot: LineupSlot) -> LineupSlot:
        """Insert or replace the occupant of (user, league, position, matchday)."""
        ...

    async def list_slots(
        self, db: AsyncSession, user_id: str, league_id: str, matchday: int
    ) -> list[LineupSlot]: ...

    async def remove_player_slots(
        self, db: AsyncSession, user_id: str, league_id: str, player_id: str
    ) -> int:
        """Clear every slot (any matchday) that references the player."""
        ...
