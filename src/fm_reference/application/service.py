"""PlayerCatalogService — read-only market listing over the provider."""

from src.fm_common.errors import PlayerNotFoundError
from src.fm_reference.application.schemas import PlayerListResponse, PlayerOut
from src.fm_reference.domain.normalize import parse_position
from src.fm_reference.domain.provider import PlayerProviderProtocol
from src.fm_reference.infrastructure.factory import get_player_provider


class PlayerCatalogService:
    def __init__(self, provider: PlayerProviderProtocol | None = None) -> None:
        self._provider = provider

    @property
    def provider(self) -> PlayerProviderProtocol:
        return self._provider or get_player_provider()

    async def list_players(
        self, team: str | None = None, role: str | None = None
    ) -> PlayerListResponse:
        parsed_role = parse_position(role) if role else None
        players = await self.provider.list_players(team=team, role=parsed_role)
        players.sort(key=lambda p: (p.team, p.role.value, p.name))
        return PlayerListResponse(items=[PlayerOut.from_domain(p) for p in players])

    async def get_player(self, player_id: str) -> PlayerOut:
        player = await self.provider.lookup_player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return PlayerOut.from_domain(player)
