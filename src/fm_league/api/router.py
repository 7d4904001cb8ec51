"""fm_league REST API — join a league, list its members."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.database import get_db_session
from src.fm_common.response import ApiResponse, success_response
from src.fm_gateway.auth.dependencies import get_current_user_id
from src.fm_league.api.dependencies import require_league_member
from src.fm_league.application.service import LeagueApplicationService

router = APIRouter(prefix="/leagues", tags=["leagues"])

_service = LeagueApplicationService()


@router.post("/{league_id}/join")
async def join_league(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    league_id: str = Path(..., min_length=1, max_length=64),
) -> ApiResponse:
    data = await _service.join_league(db, user_id, league_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{league_id}/members")
async def list_members(
    league_id: str,
    _member: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_members(db, league_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
