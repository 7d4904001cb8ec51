"""003: create budget_accounts table

Revision ID: 003
Revises: 002
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE budget_accounts (
            user_id     VARCHAR(64) NOT NULL,
            league_id   VARCHAR(64) NOT NULL,
            money       BIGINT      NOT NULL,
            version     BIGINT      NOT NULL DEFAULT 0,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT pk_budget_accounts         PRIMARY KEY (user_id, league_id),
            CONSTRAINT ck_budget_accounts_money   CHECK (money >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_budget_accounts_updated_at
            BEFORE UPDATE ON budget_accounts
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE budget_accounts IS 'Per-league spendable balance, in millions';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS budget_accounts CASCADE;")
