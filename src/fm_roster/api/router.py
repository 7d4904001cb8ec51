"""fm_roster REST API — roster read, market buy and sell."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.database import get_db_session
from src.fm_common.response import ApiResponse, success_response
from src.fm_league.api.dependencies import require_league_member
from src.fm_roster.application.schemas import BuyPlayerRequest, SellPlayerRequest
from src.fm_roster.application.service import RosterApplicationService

router = APIRouter(prefix="/leagues", tags=["roster"])

_service = RosterApplicationService()


@router.get("/{league_id}/roster")
async def get_roster(
    league_id: str,
    user_id: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_roster(db, user_id, league_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{league_id}/roster/buy", status_code=201)
async def buy_player(
    league_id: str,
    body: BuyPlayerRequest,
    user_id: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.buy(db, user_id, league_id, body.player_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{league_id}/roster/sell")
async def sell_player(
    league_id: str,
    body: SellPlayerRequest,
    user_id: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.sell(db, user_id, league_id, body.player_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
