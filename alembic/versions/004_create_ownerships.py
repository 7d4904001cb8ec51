"""004: create ownerships table

Revision ID: 004
Revises: 003
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ownerships (
            user_id       VARCHAR(64) NOT NULL,
            league_id     VARCHAR(64) NOT NULL,
            player_id     VARCHAR(64) NOT NULL,
            team          VARCHAR(64) NOT NULL,
            role          VARCHAR(16) NOT NULL
                CHECK (role IN ('top', 'jungle', 'mid', 'adc', 'support')),
            purchased_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_ownerships_user_league_player UNIQUE (user_id, league_id, player_id)
        );
    """)
    op.execute("CREATE INDEX idx_ownerships_league_player ON ownerships (league_id, player_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ownerships CASCADE;")
