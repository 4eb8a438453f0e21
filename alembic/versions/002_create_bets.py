"""002: create bets table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bets (
            id              VARCHAR(64)     PRIMARY KEY,
            account_id      VARCHAR(64)     NOT NULL REFERENCES accounts (id),
            amount          BIGINT          NOT NULL,
            status          VARCHAR(16)     NOT NULL DEFAULT 'PLACED',
            result          VARCHAR(8),
            payout_amount   BIGINT          NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            settled_at      TIMESTAMPTZ,
            CONSTRAINT ck_bets_amount_gt_0      CHECK (amount > 0),
            CONSTRAINT ck_bets_payout_gte_0     CHECK (payout_amount >= 0),
            CONSTRAINT ck_bets_status           CHECK (status IN ('PLACED', 'SETTLED')),
            CONSTRAINT ck_bets_result           CHECK (result IS NULL OR result IN ('WIN', 'LOSE', 'VOID')),
            CONSTRAINT ck_bets_lifecycle CHECK (
                (status = 'PLACED'
                    AND result IS NULL AND payout_amount = 0 AND settled_at IS NULL)
                OR
                (status = 'SETTLED'
                    AND result IS NOT NULL AND settled_at IS NOT NULL)
            )
        );
    """)
    op.execute("CREATE INDEX idx_bets_account_time ON bets (account_id, created_at DESC);")
    op.execute("CREATE INDEX idx_bets_open ON bets (created_at, id) WHERE status = 'PLACED';")
    op.execute("COMMENT ON TABLE bets IS 'Wagers — PLACED → SETTLED exactly once, result/payout write-once';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bets CASCADE;")
