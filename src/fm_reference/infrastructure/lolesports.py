"""LoL Esports persisted-gateway client — concrete PlayerProviderProtocol.

One ``getTeams`` payload carries every team with its players. The payload is
cached in Redis for ``cache_ttl`` seconds; prices are generated after the
cache, per lookup, by the injected PricePolicy.

Unreachable upstream or a malformed payload raises ReferenceProviderError.
A missing player is a normal ``None``.
"""

import json
import logging
from typing import Any

import httpx
import redis.asyncio as aioredis

from src.fm_common.enums import Role
from src.fm_common.errors import ReferenceProviderError
from src.fm_reference.domain.models import PlayerRef
from src.fm_reference.domain.normalize import is_excluded, normalize_player
from src.fm_reference.domain.pricing import PricePolicy

logger = logging.getLogger("fm.reference")

_CACHE_KEY = "reference:lolesports:teams"


class LolEsportsProvider:
    def __init__(
        self,
        client: httpx.AsyncClient,
        pricer: PricePolicy,
        league_name: str = "LEC",
        excluded_players: frozenset[str] = frozenset(),
        cache: aioredis.Redis | None = None,
        cache_ttl: int = 0,
    ) -> None:
        self._client = client
        self._pricer = pricer
        self._league_name = league_name
        self._excluded = excluded_players
        self._cache = cache
        self._cache_ttl = cache_ttl

    def use_cache(self, cache: aioredis.Redis, ttl: int) -> None:
        self._cache = cache
        self._cache_ttl = ttl

    async def lookup_player(self, player_id: str) -> PlayerRef | None:
        for team in await self._fetch_teams():
            for raw in team.get("players") or []:
                if raw.get("id") != player_id:
                    continue
                if is_excluded(raw, self._excluded):
                    return None
                return normalize_player(raw, team, self._pricer.price_for(player_id))
        return None

    async def list_players(
        self, team: str | None = None, role: Role | None = None
    ) -> list[PlayerRef]:
        wanted_team = team.lower() if team else None
        players: list[PlayerRef] = []
        for team_payload in await self._fetch_teams():
            home = team_payload.get("homeLeague") or {}
            if home.get("name") != self._league_name:
                continue
            if wanted_team and wanted_team not in (
                str(team_payload.get("code", "")).lower(),
                str(team_payload.get("id", "")).lower(),
            ):
                continue
            for raw in team_payload.get("players") or []:
                if is_excluded(raw, self._excluded):
                    continue
                player = normalize_player(
                    raw, team_payload, self._pricer.price_for(str(raw.get("id")))
                )
                if player is None or (role is not None and player.role is not role):
                    continue
                players.append(player)
        return players

    async def _fetch_teams(self) -> list[dict[str, Any]]:
        if self._cache is not None and self._cache_ttl > 0:
            cached = await self._cache.get(_CACHE_KEY)
            if cached:
                return json.loads(cached)  # type: ignore[no-any-return]

        try:
            resp = await self._client.get("/getTeams", params={"hl": "en-US"})
            resp.raise_for_status()
            teams = resp.json()["data"]["teams"] or []
        except httpx.HTTPError as exc:
            logger.warning("getTeams request failed: %s", exc)
            raise ReferenceProviderError(str(exc)) from exc
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("getTeams returned an unexpected payload: %s", exc)
            raise ReferenceProviderError("unexpected getTeams payload") from exc

        if self._cache is not None and self._cache_ttl > 0:
            await self._cache.set(_CACHE_KEY, json.dumps(teams), ex=self._cache_ttl)
        return teams  # type: ignore[no-any-return]
