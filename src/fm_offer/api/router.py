"""fm_offer REST API — create, list, accept and reject trade offers.

Creation and listing are league-scoped and require membership. Accept and
reject are addressed by offer id; the service checks the caller is the
buyer (accept) or either party (reject).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.database import get_db_session
from src.fm_common.response import ApiResponse, success_response
from src.fm_gateway.auth.dependencies import get_current_user_id
from src.fm_league.api.dependencies import require_league_member
from src.fm_offer.application.schemas import CreateOfferRequest
from src.fm_offer.application.service import OfferApplicationService

router = APIRouter(tags=["offers"])

_service = OfferApplicationService()


@router.post("/leagues/{league_id}/offers", status_code=201)
async def create_offer(
    league_id: str,
    body: CreateOfferRequest,
    user_id: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create(
        db, user_id, league_id, body.player_id, body.buyer_user_id, body.price
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/leagues/{league_id}/offers")
async def list_offers(
    league_id: str,
    user_id: Annotated[str, Depends(require_league_member)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    status: str | None = Query(
        None,
        pattern="^(pending|accepted|completed|rejected|expired)$",
        description="Filter by status",
    ),
) -> ApiResponse:
    data = await _service.list_offers(db, user_id, league_id, status)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/offers/{offer_id}/accept")
async def accept_offer(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    offer_id: str = Path(..., min_length=1, max_length=64),
) -> ApiResponse:
    data = await _service.accept(db, offer_id, user_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/offers/{offer_id}/reject")
async def reject_offer(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    offer_id: str = Path(..., min_length=1, max_length=64),
) -> ApiResponse:
    data = await _service.reject(db, offer_id, user_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
