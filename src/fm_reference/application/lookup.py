"""Batch resolution of player ids against the provider."""

import asyncio
from collections.abc import Iterable

from src.fm_reference.domain.models import PlayerRef
from src.fm_reference.domain.provider import PlayerProviderProtocol


async def resolve_players(
    provider: PlayerProviderProtocol, player_ids: Iterable[str]
) -> dict[str, PlayerRef]:
    """Look up each distinct id once; ids the provider no longer knows are omitted."""
    ids = list(dict.fromkeys(player_ids))
    if not ids:
        return {}
    found = await asyncio.gather(*(provider.lookup_player(pid) for pid in ids))
    return {pid: player for pid, player in zip(ids, found) if player is not None}
