"""006: create offers table

Revision ID: 006
Revises: 005
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE offers (
            id              VARCHAR(64) PRIMARY KEY,
            league_id       VARCHAR(64) NOT NULL,
            player_id       VARCHAR(64) NOT NULL,
            seller_user_id  VARCHAR(64) NOT NULL,
            buyer_user_id   VARCHAR(64) NOT NULL,
            price           BIGINT      NOT NULL,
            status          VARCHAR(16) NOT NULL DEFAULT 'pending',
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            expires_at      TIMESTAMPTZ NOT NULL,
            resolved_at     TIMESTAMPTZ,
            CONSTRAINT ck_offers_price   CHECK (price >= 1),
            CONSTRAINT ck_offers_parties CHECK (seller_user_id <> buyer_user_id),
            CONSTRAINT ck_offers_status
                CHECK (status IN ('pending', 'accepted', 'rejected', 'expired')),
            CONSTRAINT ck_offers_resolved
                CHECK ((status = 'pending') = (resolved_at IS NULL))
        );
    """)
    op.execute("""
        CREATE INDEX idx_offers_pending_expiry
            ON offers (expires_at) WHERE status = 'pending';
    """)
    op.execute("CREATE INDEX idx_offers_league_seller ON offers (league_id, seller_user_id);")
    op.execute("CREATE INDEX idx_offers_league_buyer ON offers (league_id, buyer_user_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS offers CASCADE;")
