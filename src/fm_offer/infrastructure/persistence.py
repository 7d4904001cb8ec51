"""OfferRepository — raw SQL over offers.

Status changes are compare-and-set (``WHERE status = :expected``) so a
concurrent sweep and an accept can never both resolve the same offer.

Transaction ownership: The CALLER (application service) is responsible for
committing or rolling back the session.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.enums import OfferStatus
from src.fm_common.errors import InternalError
from src.fm_offer.domain.models import Offer

_OFFER_COLUMNS = """id, league_id, player_id, seller_user_id, buyer_user_id, price,
              status, created_at, expires_at, resolved_at"""

_INSERT_OFFER_SQL = text(f"""
    INSERT INTO offers
        (id, league_id, player_id, seller_user_id, buyer_user_id, price,
         status, created_at, expires_at)
    VALUES
        (:id, :league_id, :player_id, :seller_user_id, :buyer_user_id, :price,
         :status, :created_at, :expires_at)
    RETURNING {_OFFER_COLUMNS}
""")

_GET_OFFER_SQL = text(f"""
    SELECT {_OFFER_COLUMNS} FROM offers WHERE id = :id
""")

_GET_OFFER_FOR_UPDATE_SQL = text(f"""
    SELECT {_OFFER_COLUMNS} FROM offers WHERE id = :id FOR UPDATE
""")

_UPDATE_STATUS_SQL = text(f"""
    UPDATE offers
    SET status = :new_status, resolved_at = :resolved_at
    WHERE id = :id AND status = :expected
    RETURNING {_OFFER_COLUMNS}
""")

_LIST_OFFERS_SQL = text(f"""
    SELECT {_OFFER_COLUMNS}
    FROM offers
    WHERE league_id = :league_id
      AND (seller_user_id = :user_id OR buyer_user_id = :user_id)
      AND (CAST(:statuses_csv AS TEXT) IS NULL
           OR status = ANY(string_to_array(CAST(:statuses_csv AS TEXT), ',')))
    ORDER BY expires_at ASC, id ASC
""")

_EXPIRE_DUE_SQL = text("""
    UPDATE offers
    SET status = 'expired', resolved_at = :now
    WHERE status = 'pending' AND expires_at < :now
    RETURNING id
""")


def _row_to_offer(row: object) -> Offer:
    return Offer(
        id=row.id,  # type: ignore[attr-defined]
        league_id=row.league_id,  # type: ignore[attr-defined]
        player_id=row.player_id,  # type: ignore[attr-defined]
        seller_user_id=row.seller_user_id,  # type: ignore[attr-defined]
        buyer_user_id=row.buyer_user_id,  # type: ignore[attr-defined]
        price=row.price,  # type: ignore[attr-defined]
        status=OfferStatus.parse(row.status),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        expires_at=row.expires_at,  # type: ignore[attr-defined]
        resolved_at=row.resolved_at,  # type: ignore[attr-defined]
    )


class OfferRepository:
    async def create_offer(self, db: AsyncSession, offer: Offer) -> Offer:
        result = await db.execute(
            _INSERT_OFFER_SQL,
            {
                "id": offer.id,
                "league_id": offer.league_id,
                "player_id": offer.player_id,
                "seller_user_id": offer.seller_user_id,
                "buyer_user_id": offer.buyer_user_id,
                "price": offer.price,
                "status": offer.status.value,
                "created_at": offer.created_at,
                "expires_at": offer.expires_at,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Offer insert returned no rows — this should never happen")
        return _row_to_offer(row)

    async def get_offer(self, db: AsyncSession, offer_id: str) -> Offer | None:
        result = await db.execute(_GET_OFFER_SQL, {"id": offer_id})
        row = result.fetchone()
        return _row_to_offer(row) if row else None

    async def get_offer_for_update(
        self, db: AsyncSession, offer_id: str
    ) -> Offer | None:
        result = await db.execute(_GET_OFFER_FOR_UPDATE_SQL, {"id": offer_id})
        row = result.fetchone()
        return _row_to_offer(row) if row else None

    async def update_status(
        self,
        db: AsyncSession,
        offer_id: str,
        expected: OfferStatus,
        new_status: OfferStatus,
        resolved_at: datetime,
    ) -> Offer | None:
        result = await db.execute(
            _UPDATE_STATUS_SQL,
            {
                "id": offer_id,
                "expected": expected.value,
                "new_status": new_status.value,
                "resolved_at": resolved_at,
            },
        )
        row = result.fetchone()
        return _row_to_offer(row) if row else None

    async def list_offers(
        self,
        db: AsyncSession,
        league_id: str,
        user_id: str,
        statuses: list[OfferStatus] | None,
    ) -> list[Offer]:
        statuses_csv = ",".join(s.value for s in statuses) if statuses else None
        result = await db.execute(
            _LIST_OFFERS_SQL,
            {"league_id": league_id, "user_id": user_id, "statuses_csv": statuses_csv},
        )
        return [_row_to_offer(row) for row in result.fetchall()]

    async def expire_due(self, db: AsyncSession, now: datetime) -> list[str]:
        result = await db.execute(_EXPIRE_DUE_SQL, {"now": now})
        return [row.id for row in result.fetchall()]
