"""Repository Protocol — dependency inversion for testability.

Unit tests inject an implementation that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_reference.domain.models import PlayerRef
from src.fm_roster.domain.models import Ownership


class RosterRepositoryProtocol(Protocol):
    async def get_ownership(
        self, db: AsyncSession, user_id: str, league_id: str, player_id: str
    ) -> Ownership | None: ...

    async def list_ownerships(
        self, db: AsyncSession, user_id: str, league_id: str
    ) -> list[Ownership]: ...

    async def add_ownership(
        self,
        db: AsyncSession,
        user_id: str,
        league_id: str,
        player: PlayerRef,
        purchased_at: datetime,
    ) -> Ownership:
        """Insert with the player's team and role; raises AlreadyOwnedError
        when the unique key already exists."""
        ...

    async def remove_ownership(
        self, db: AsyncSession, user_id: str, league_id: str, player_id: str
    ) -> bool:
        """Delete; returns False when there was nothing to delete."""
        ...
