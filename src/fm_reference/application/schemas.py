"""Pydantic schemas for fm_reference API."""

from pydantic import BaseModel

from src.fm_common.money import millions_to_display
from src.fm_reference.domain.models import PlayerRef


class PlayerOut(BaseModel):
    id: str
    name: str
    team: str
    team_name: str | None
    role: str
    price: int
    price_display: str
    image_url: str | None

    @classmethod
    def from_domain(cls, player: PlayerRef) -> "PlayerOut":
        return cls(
            id=player.id,
            name=player.name,
            team=player.team,
            team_name=player.team_name,
            role=player.role.value,
            price=player.price,
            price_display=millions_to_display(player.price),
            image_url=player.image_url,
        )


class PlayerListResponse(BaseModel):
    items: list[PlayerOut]
