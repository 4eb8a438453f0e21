"""003: create ledger_entries table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ledger_entries (
            id              BIGSERIAL       PRIMARY KEY,
            account_id      VARCHAR(64)     NOT NULL REFERENCES accounts (id),
            kind            VARCHAR(16)     NOT NULL,
            amount          BIGINT          NOT NULL,
            bet_id          VARCHAR(64)     REFERENCES bets (id),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT clock_timestamp(),
            CONSTRAINT ck_ledger_kind CHECK (kind IN ('DEPOSIT', 'BET_DEBIT', 'BET_CREDIT')),
            CONSTRAINT ck_ledger_amount_gt_0 CHECK (amount > 0),
            CONSTRAINT ck_ledger_bet_link CHECK (
                (kind = 'DEPOSIT' AND bet_id IS NULL)
                OR (kind IN ('BET_DEBIT', 'BET_CREDIT') AND bet_id IS NOT NULL)
            )
        );
    """)
    op.execute("CREATE INDEX idx_ledger_account_id ON ledger_entries (account_id, id DESC);")
    # One BET_DEBIT and at most one BET_CREDIT per bet
    op.execute("""
        CREATE UNIQUE INDEX uq_ledger_bet_kind
        ON ledger_entries (bet_id, kind)
        WHERE bet_id IS NOT NULL;
    """)
    # Append-only: reject UPDATE and DELETE at the storage level
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_ledger_entries_append_only()
        RETURNS TRIGGER AS $$
        BEGIN
            RAISE EXCEPTION 'ledger_entries is append-only';
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TRIGGER trg_ledger_entries_append_only
            BEFORE UPDATE OR DELETE ON ledger_entries
            FOR EACH ROW EXECUTE FUNCTION fn_ledger_entries_append_only();
    """)
    op.execute("COMMENT ON TABLE ledger_entries IS 'Monetary movements — Append-Only, never updated or deleted';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ledger_entries CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_ledger_entries_append_only();")
