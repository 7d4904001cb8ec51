"""Provider Protocol — the read-only contract the core consumes.

Every lookup may return a different price for the same player. Callers take
one snapshot per transaction and never re-fetch mid-transaction.
"""

from typing import Protocol

from src.fm_common.enums import Role
from src.fm_reference.domain.models import PlayerRef


class PlayerProviderProtocol(Protocol):
    async def lookup_player(self, player_id: str) -> PlayerRef | None: ...

    async def list_players(
        self, team: str | None = None, role: Role | None = None
    ) -> list[PlayerRef]: ...
