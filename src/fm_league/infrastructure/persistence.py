"""LeagueRepository — raw SQL over league_members.

UNIQUE (league_id, user_id) makes a second join a no-op insert, reported
as AlreadyParticipantError.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.errors import AlreadyParticipantError
from src.fm_league.domain.models import LeagueMember

_ADD_MEMBER_SQL = text("""
    INSERT INTO league_members (league_id, user_id)
    VALUES (:league_id, :user_id)
    ON CONFLICT (league_id, user_id) DO NOTHING
    RETURNING league_id, user_id, joined_at
""")

_IS_MEMBER_SQL = text("""
    SELECT 1 FROM league_members
    WHERE league_id = :league_id AND user_id = :user_id
""")

_LIST_MEMBERS_SQL = text("""
    SELECT league_id, user_id, joined_at
    FROM league_members
    WHERE league_id = :league_id
    ORDER BY joined_at, user_id
""")


def _row_to_member(row: object) -> LeagueMember:
    return LeagueMember(
        league_id=row.league_id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        joined_at=row.joined_at,  # type: ignore[attr-defined]
    )


class LeagueRepository:
    async def add_member(
        self, db: AsyncSession, league_id: str, user_id: str
    ) -> LeagueMember:
        result = await db.execute(
            _ADD_MEMBER_SQL, {"league_id": league_id, "user_id": user_id}
        )
        row = result.fetchone()
        if row is None:
            raise AlreadyParticipantError(user_id, league_id)
        return _row_to_member(row)

    async def is_member(self, db: AsyncSession, league_id: str, user_id: str) -> bool:
        result = await db.execute(
            _IS_MEMBER_SQL, {"league_id": league_id, "user_id": user_id}
        )
        return result.fetchone() is not None

    async def list_members(self, db: AsyncSession, league_id: str) -> list[LeagueMember]:
        result = await db.execute(_LIST_MEMBERS_SQL, {"league_id": league_id})
        return [_row_to_member(row) for row in result.fetchall()]
