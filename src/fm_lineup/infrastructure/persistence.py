"""LineupRepository — raw SQL over lineup_slots.

UNIQUE (user_id, league_id, position, matchday) backs the upsert, so a
position holds at most one starter per matchday even under concurrent writes.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.enums import Role
from src.fm_common.errors import InternalError
from src.fm_lineup.domain.models import LineupSlot

_UPSERT_SLOT_SQL = text("""
    INSERT INTO lineup_slots (user_id, league_id, position, matchday, player_id)
    VALUES (:user_id, :league_id, :position, :matchday, :player_id)
    ON CONFLICT (user_id, league_id, position, matchday) DO UPDATE
        SET player_id = EXCLUDED.player_id,
            updated_at = NOW()
    RETURNING user_id, league_id, position, matchday, player_id
""")

_LIST_SLOTS_SQL = text("""
    SELECT user_id, league_id, position, matchday, player_id
    FROM lineup_slots
    WHERE user_id = :user_id AND league_id = :league_id AND matchday = :matchday
""")

_DELETE_PLAYER_SLOTS_SQL = text("""
    DELETE FROM lineup_slots
    WHERE user_id = :user_id AND league_id = :league_id AND player_id = :player_id
    RETURNING position
""")


def _row_to_slot(row: object) -> LineupSlot:
    return LineupSlot(
        user_id=row.user_id,  # type: ignore[attr-defined]
        league_id=row.league_id,  # type: ignore[attr-defined]
        position=Role(row.position),  # type: ignore[attr-defined]
        matchday=row.matchday,  # type: ignore[attr-defined]
        player_id=row.player_id,  # type: ignore[attr-defined]
    )


class LineupRepository:
    async def upsert_slot(self, db: AsyncSession, slot: LineupSlot) -> LineupSlot:
        result = await db.execute(
            _UPSERT_SLOT_SQL,
            {
                "user_id": slot.user_id,
                "league_id": slot.league_id,
                "position": slot.position.value,
                "matchday": slot.matchday,
                "player_id": slot.player_id,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Lineup upsert returned no rows — this should never happen")
        return _row_to_slot(row)

    async def list_slots(
        self, db: AsyncSession, user_id: str, league_id: str, matchday: int
    ) -> list[LineupSlot]:
        result = await db.execute(
            _LIST_SLOTS_SQL,
            {"user_id": user_id, "league_id": league_id, "matchday": matchday},
        )
        return [_row_to_slot(row) for row in result.fetchall()]

    async def remove_player_slots(
        self, db: AsyncSession, user_id: str, league_id: str, player_id: str
    ) -> int:
        result = await db.execute(
            _DELETE_PLAYER_SLOTS_SQL,
            {"user_id": user_id, "league_id": league_id, "player_id": player_id},
        )
        return len(result.fetchall())
