"""In-process player catalog — concrete PlayerProviderProtocol.

Used for local development (``REFERENCE_PROVIDER=static``) and tests. Each
instance owns its own catalog; nothing is shared between instances.
"""

import json
from collections.abc import Iterable
from pathlib import Path

from src.fm_common.enums import Role
from src.fm_reference.domain.models import PlayerRef
from src.fm_reference.domain.normalize import is_excluded, normalize_player


class StaticPlayerProvider:
    def __init__(self, players: Iterable[PlayerRef]) -> None:
        self._players: dict[str, PlayerRef] = {p.id: p for p in players}

    @classmethod
    def from_json(
        cls, path: str | Path, excluded_players: frozenset[str] = frozenset()
    ) -> "StaticPlayerProvider":
        """Load a ``getTeams``-shaped file: ``[{code, name, players: [...]}]``.

        Each player record must carry a ``price``.
        """
        teams = json.loads(Path(path).read_text(encoding="utf-8"))
        players: list[PlayerRef] = []
        for team in teams:
            for raw in team.get("players") or []:
                if is_excluded(raw, excluded_players):
                    continue
                player = normalize_player(raw, team, int(raw["price"]))
                if player is not None:
                    players.append(player)
        return cls(players)

    async def lookup_player(self, player_id: str) -> PlayerRef | None:
        return self._players.get(player_id)

    async def list_players(
        self, team: str | None = None, role: Role | None = None
    ) -> list[PlayerRef]:
        wanted_team = team.lower() if team else None
        return [
            p
            for p in self._players.values()
            if (wanted_team is None or p.team.lower() == wanted_team)
            and (role is None or p.role is role)
        ]
