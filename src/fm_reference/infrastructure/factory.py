"""Builds the process-wide PlayerProviderProtocol from settings."""

import httpx

from config.settings import settings
from src.fm_common.redis_client import get_redis
from src.fm_reference.domain.pricing import UniformRandomPricer
from src.fm_reference.domain.provider import PlayerProviderProtocol
from src.fm_reference.infrastructure.lolesports import LolEsportsProvider
from src.fm_reference.infrastructure.static_catalog import StaticPlayerProvider

_provider: PlayerProviderProtocol | None = None
_http_client: httpx.AsyncClient | None = None


def build_player_provider() -> PlayerProviderProtocol:
    excluded = frozenset(settings.REFERENCE_EXCLUDED_PLAYERS)
    if settings.REFERENCE_PROVIDER == "static":
        return StaticPlayerProvider.from_json(settings.REFERENCE_CATALOG_PATH, excluded)
    if settings.REFERENCE_PROVIDER != "lolesports":
        raise ValueError(f"Unknown REFERENCE_PROVIDER: {settings.REFERENCE_PROVIDER}")

    global _http_client  # noqa: PLW0603
    _http_client = httpx.AsyncClient(
        base_url=settings.LOLESPORTS_API_URL,
        headers={"x-api-key": settings.LOLESPORTS_API_KEY},
        timeout=settings.LOLESPORTS_TIMEOUT_SECONDS,
    )
    return LolEsportsProvider(
        client=_http_client,
        pricer=UniformRandomPricer(
            settings.PLAYER_PRICE_MIN, settings.PLAYER_PRICE_MAX, settings.PLAYER_PRICE_SEED
        ),
        league_name=settings.LOLESPORTS_LEAGUE_NAME,
        excluded_players=excluded,
    )


def get_player_provider() -> PlayerProviderProtocol:
    """Lazily build and memoize the provider on first use."""
    global _provider  # noqa: PLW0603
    if _provider is None:
        _provider = build_player_provider()
    return _provider


async def attach_cache() -> None:
    """Give the LoL Esports provider its Redis cache (called at startup)."""
    if settings.REFERENCE_CACHE_TTL_SECONDS <= 0:
        return
    provider = get_player_provider()
    if isinstance(provider, LolEsportsProvider):
        provider.use_cache(await get_redis(), settings.REFERENCE_CACHE_TTL_SECONDS)


async def close_player_provider() -> None:
    global _provider, _http_client  # noqa: PLW0603
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
    _provider = None
