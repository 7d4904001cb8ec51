"""005: create lineup_slots table

Revision ID: 005
Revises: 004
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE lineup_slots (
            user_id     VARCHAR(64) NOT NULL,
            league_id   VARCHAR(64) NOT NULL,
            position    VARCHAR(16) NOT NULL,
            matchday    INT         NOT NULL DEFAULT 1,
            player_id   VARCHAR(64) NOT NULL,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_lineup_slots_position
                UNIQUE (user_id, league_id, position, matchday),
            CONSTRAINT ck_lineup_slots_position
                CHECK (position IN ('top', 'jungle', 'mid', 'adc', 'support')),
            CONSTRAINT ck_lineup_slots_matchday CHECK (matchday >= 1)
        );
    """)
    op.execute("""
        CREATE INDEX idx_lineup_slots_player
            ON lineup_slots (user_id, league_id, player_id);
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS lineup_slots CASCADE;")
