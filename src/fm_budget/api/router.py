"""fm_budget REST API — balance and transaction log (read-only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_budget.application.service import BudgetApplicationService
from src.fm_common.database import get_db_session
from src.fm_common.response import ApiResponse, success_response
from src.fm_league.api.dependencies import require_league_member

router = APIRouter(prefix="/leagues", tags=["budget"])

_service = BudgetApplicationService()


@router.get("/{league_id}/budget")
async def get_budget(
    league_id: str,
    user_id: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_budget(db, user_id, league_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{league_id}/transactions")
async def list_transactions(
    league_id: str,
    _member: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    user_id: str | None = Query(None, description="Only entries of this user"),
) -> ApiResponse:
    data = await _service.list_transactions(db, league_id, cursor, limit, user_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
