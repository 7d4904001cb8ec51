"""FastAPI dependency: require_league_member.

Resolves the authenticated user and checks membership of the ``league_id``
path parameter before any core operation runs.
"""

from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.database import get_db_session
from src.fm_gateway.auth.dependencies import get_current_user_id
from src.fm_league.application.service import LeagueApplicationService

_service = LeagueApplicationService()


async def require_league_member(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    league_id: str = Path(..., min_length=1, max_length=64),
) -> str:
    """Return the caller's user id; raises NotParticipantError (403) otherwise."""
    await _service.require_participant(db, user_id, league_id)
    return user_id
