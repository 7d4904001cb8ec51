"""fm_reference REST API — market listing."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.fm_common.response import ApiResponse, success_response
from src.fm_gateway.auth.dependencies import get_current_user_id
from src.fm_reference.application.service import PlayerCatalogService

router = APIRouter(prefix="/players", tags=["players"])

_service = PlayerCatalogService()


@router.get("")
async def list_players(
    _user_id: Annotated[str, Depends(get_current_user_id)],
    request: Request,
    team: str | None = Query(None, description="Team code, e.g. G2"),
    role: str | None = Query(None, description="top | jungle | mid | adc | support"),
) -> ApiResponse:
    data = await _service.list_players(team=team, role=role)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{player_id}")
async def get_player(
    player_id: str,
    _user_id: Annotated[str, Depends(get_current_user_id)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_player(player_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
