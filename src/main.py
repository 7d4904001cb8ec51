"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.fm_budget.api.router import router as budget_router
from src.fm_common.database import engine
from src.fm_common.errors import AppError
from src.fm_common.redis_client import close_redis, get_redis
from src.fm_common.response import error_response
from src.fm_gateway.middleware.request_log import RequestLogMiddleware
from src.fm_league.api.router import router as league_router
from src.fm_lineup.api.router import router as lineup_router
from src.fm_offer.api.router import router as offer_router
from src.fm_offer.application.sweep import run_expiry_sweep
from src.fm_reference.api.router import router as players_router
from src.fm_reference.infrastructure.factory import attach_cache, close_player_provider
from src.fm_roster.api.router import router as roster_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis, wire the reference cache, start the sweep.
    Shutdown: stop the sweep, dispose connections."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    await attach_cache()
    sweep: asyncio.Task[None] | None = None
    if settings.OFFER_SWEEP_INTERVAL_SECONDS > 0:
        sweep = asyncio.create_task(run_expiry_sweep(settings.OFFER_SWEEP_INTERVAL_SECONDS))
    yield
    # Shutdown
    if sweep is not None:
        sweep.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweep
    await close_player_provider()
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, exc.details)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(league_router, prefix="/api/v1")
app.include_router(budget_router, prefix="/api/v1")
app.include_router(players_router, prefix="/api/v1")
app.include_router(roster_router, prefix="/api/v1")
app.include_router(lineup_router, prefix="/api/v1")
app.include_router(offer_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
