"""RosterRepository — concrete implementation of RosterRepositoryProtocol.

UNIQUE (user_id, league_id, player_id) on ``ownerships`` is the final
arbiter for duplicate purchases: two racing inserts of the same triple
resolve to one row, the loser sees 0 rows from ON CONFLICT DO NOTHING.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.enums import Role
from src.fm_common.errors import AlreadyOwnedError
from src.fm_reference.domain.models import PlayerRef
from src.fm_roster.domain.models import Ownership

_OWNERSHIP_COLUMNS = "user_id, league_id, player_id, team, role, purchased_at"

_GET_OWNERSHIP_SQL = text(f"""
    SELECT {_OWNERSHIP_COLUMNS}
    FROM ownerships
    WHERE user_id = :user_id AND league_id = :league_id AND player_id = :player_id
""")

_LIST_OWNERSHIPS_SQL = text(f"""
    SELECT {_OWNERSHIP_COLUMNS}
    FROM ownerships
    WHERE user_id = :user_id AND league_id = :league_id
    ORDER BY purchased_at, player_id
""")

_INSERT_OWNERSHIP_SQL = text(f"""
    INSERT INTO ownerships (user_id, league_id, player_id, team, role, purchased_at)
    VALUES (:user_id, :league_id, :player_id, :team, :role, :purchased_at)
    ON CONFLICT (user_id, league_id, player_id) DO NOTHING
    RETURNING {_OWNERSHIP_COLUMNS}
""")

_DELETE_OWNERSHIP_SQL = text("""
    DELETE FROM ownerships
    WHERE user_id = :user_id AND league_id = :league_id AND player_id = :player_id
    RETURNING player_id
""")


def _row_to_ownership(row: object) -> Ownership:
    return Ownership(
        user_id=row.user_id,  # type: ignore[attr-defined]
        league_id=row.league_id,  # type: ignore[attr-defined]
        player_id=row.player_id,  # type: ignore[attr-defined]
        team=row.team,  # type: ignore[attr-defined]
        role=Role(row.role),  # type: ignore[attr-defined]
        purchased_at=row.purchased_at,  # type: ignore[attr-defined]
    )


class RosterRepository:
    async def get_ownership(
        self, db: AsyncSession, user_id: str, league_id: str, player_id: str
    ) -> Ownership | None:
        result = await db.execute(
            _GET_OWNERSHIP_SQL,
            {"user_id": user_id, "league_id": league_id, "player_id": player_id},
        )
        row = result.fetchone()
        return _row_to_ownership(row) if row else None

    async def list_ownerships(
        self, db: AsyncSession, user_id: str, league_id: str
    ) -> list[Ownership]:
        result = await db.execute(
            _LIST_OWNERSHIPS_SQL, {"user_id": user_id, "league_id": league_id}
        )
        return [_row_to_ownership(row) for row in result.fetchall()]

    async def add_ownership(
        self,
        db: AsyncSession,
        user_id: str,
        league_id: str,
        player: PlayerRef,
        purchased_at: datetime,
    ) -> Ownership:
        result = await db.execute(
            _INSERT_OWNERSHIP_SQL,
            {
                "user_id": user_id,
                "league_id": league_id,
                "player_id": player.id,
                "team": player.team,
                "role": player.role.value,
                "purchased_at": purchased_at,
            },
        )
        row = result.fetchone()
        if row is None:
            raise AlreadyOwnedError(player.id, league_id)
        return _row_to_ownership(row)

    async def remove_ownership(
        self, db: AsyncSession, user_id: str, league_id: str, player_id: str
    ) -> bool:
        result = await db.execute(
            _DELETE_OWNERSHIP_SQL,
            {"user_id": user_id, "league_id": league_id, "player_id": player_id},
        )
        return result.fetchone() is not None
