"""007: create transactions table

Revision ID: 007
Revises: 006
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transactions (
            id                    BIGSERIAL   PRIMARY KEY,
            league_id             VARCHAR(64) NOT NULL,
            user_id               VARCHAR(64) NOT NULL,
            entry_type            VARCHAR(16) NOT NULL,
            amount                BIGINT      NOT NULL,
            balance_after         BIGINT      NOT NULL,
            player_id             VARCHAR(64) NOT NULL,
            player_name           VARCHAR(128),
            player_team           VARCHAR(16),
            player_role           VARCHAR(16),
            counterparty_user_id  VARCHAR(64),
            reference_id          VARCHAR(64),
            created_at            TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_transactions_type
                CHECK (entry_type IN ('PURCHASE', 'SALE', 'TRADE_BUY', 'TRADE_SELL')),
            CONSTRAINT ck_transactions_balance CHECK (balance_after >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_transactions_league_id ON transactions (league_id, id DESC);")
    op.execute("COMMENT ON TABLE transactions IS 'Append-only roster money movements';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions CASCADE;")
