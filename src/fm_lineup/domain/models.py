"""Domain models for fm_lineup — pure dataclasses."""

from dataclasses import dataclass, field

from src.fm_common.enums import Role

DEFAULT_MATCHDAY = 1


@dataclass
class LineupSlot:
    """Starter for one position in one matchday. Unique per
    (user_id, league_id, position, matchday)."""

    user_id: str
    league_id: str
    position: Role
    matchday: int
    player_id: str


@dataclass
class Lineup:
    """All five positions for one matchday; empty positions hold None."""

    user_id: str
    league_id: str
    matchday: int
    slots: dict[Role, str | None] = field(
        default_factory=lambda: {role: None for role in Role}
    )

    @classmethod
    def from_slots(
        cls, user_id: str, league_id: str, matchday: int, slots: list[LineupSlot]
    ) -> "Lineup":
        lineup = cls(user_id=user_id, league_id=league_id, matchday=matchday)
        for slot in slots:
            lineup.slots[slot.position] = slot.player_id
        return lineup

    def occupied(self) -> list[tuple[Role, str]]:
        """(position, player_id) for filled positions, in canonical role order."""
        return [(role, pid) for role, pid in self.slots.items() if pid is not None]
