"""fm_lineup REST API — read and set starters."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.database import get_db_session
from src.fm_common.response import ApiResponse, success_response
from src.fm_league.api.dependencies import require_league_member
from src.fm_lineup.application.schemas import SetStarterRequest
from src.fm_lineup.application.service import LineupApplicationService
from src.fm_lineup.domain.models import DEFAULT_MATCHDAY

router = APIRouter(prefix="/leagues", tags=["lineup"])

_service = LineupApplicationService()


@router.get("/{league_id}/lineup")
async def get_lineup(
    league_id: str,
    user_id: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    matchday: int = Query(DEFAULT_MATCHDAY, ge=1),
) -> ApiResponse:
    data = await _service.get_lineup(db, user_id, league_id, matchday)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/{league_id}/lineup")
async def set_starter(
    league_id: str,
    body: SetStarterRequest,
    user_id: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.set_starter(
        db, user_id, league_id, body.player_id, body.position, body.matchday
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
