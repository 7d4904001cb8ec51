"""002: create league_members table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE league_members (
            league_id   VARCHAR(64) NOT NULL,
            user_id     VARCHAR(64) NOT NULL,
            joined_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT pk_league_members PRIMARY KEY (league_id, user_id)
        );
    """)
    op.execute("CREATE INDEX idx_league_members_user ON league_members (user_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS league_members CASCADE;")
