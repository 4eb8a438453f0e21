"""LedgerRepository — concrete implementation of LedgerRepositoryProtocol.

ledger_entries is append-only: this module only ever INSERTs and SELECTs.
There is no stored balance; callers fold the per-kind sums.

Transaction ownership: The CALLER (application service) is responsible for
committing or rolling back. `lock_account` takes a row lock on the account
that is held until the caller's transaction ends; every entry insert for an
account happens under that lock.
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_common.errors import IntegrityViolationError
from src.wl_ledger.domain.models import LedgerEntry

logger = logging.getLogger(__name__)

_LOCK_ACCOUNT_SQL = text("""
    SELECT id FROM accounts WHERE id = :account_id FOR UPDATE
""")

_SUM_BY_KIND_SQL = text("""
    SELECT kind, COALESCE(SUM(amount), 0) AS total
    FROM ledger_entries
    WHERE account_id = :account_id
    GROUP BY kind
""")

_INSERT_ENTRY_SQL = text("""
    INSERT INTO ledger_entries (account_id, kind, amount, bet_id, created_at)
    VALUES (:account_id, :kind, :amount, :bet_id, clock_timestamp())
    RETURNING id, account_id, kind, amount, bet_id, created_at
""")

_LIST_ALL_SQL = text("""
    SELECT id, account_id, kind, amount, bet_id, created_at
    FROM ledger_entries
    WHERE account_id = :account_id
    ORDER BY id ASC
""")

_LIST_PAGE_SQL = text("""
    SELECT id, account_id, kind, amount, bet_id, created_at
    FROM ledger_entries
    WHERE account_id = :account_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < :cursor_id)
      AND (CAST(:kind AS VARCHAR) IS NULL OR kind = :kind)
    ORDER BY id DESC
    LIMIT :limit
""")


def _row_to_entry(row: object) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,  # type: ignore[attr-defined]
        account_id=row.account_id,  # type: ignore[attr-defined]
        kind=row.kind,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        bet_id=row.bet_id,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class LedgerRepository:
    """Concrete repository over the ledger_entries table."""

    async def lock_account(self, db: AsyncSession, account_id: str) -> bool:
        result = await db.execute(_LOCK_ACCOUNT_SQL, {"account_id": account_id})
        return result.fetchone() is not None

    async def sum_by_kind(self, db: AsyncSession, account_id: str) -> dict[str, int]:
        result = await db.execute(_SUM_BY_KIND_SQL, {"account_id": account_id})
        # SUM(BIGINT) comes back as NUMERIC; int() is exact
        return {row.kind: int(row.total) for row in result.fetchall()}

    async def insert_entry(
        self,
        db: AsyncSession,
        account_id: str,
        kind: str,
        amount: int,
        bet_id: str | None,
    ) -> LedgerEntry:
        try:
            result = await db.execute(
                _INSERT_ENTRY_SQL,
                {
                    "account_id": account_id,
                    "kind": kind,
                    "amount": amount,
                    "bet_id": bet_id,
                },
            )
        except IntegrityError as exc:
            logger.error(
                "Ledger insert rejected by constraint: account=%s kind=%s amount=%s bet=%s",
                account_id, kind, amount, bet_id,
            )
            raise IntegrityViolationError(
                "ledger entry insert rejected by storage constraint",
                account_id=account_id,
                kind=kind,
                bet_id=bet_id,
            ) from exc
        row = result.fetchone()
        if row is None:
            raise IntegrityViolationError("ledger insert returned no rows", account_id=account_id)
        return _row_to_entry(row)

    async def list_all_entries(
        self, db: AsyncSession, account_id: str
    ) -> list[LedgerEntry]:
        result = await db.execute(_LIST_ALL_SQL, {"account_id": account_id})
        return [_row_to_entry(row) for row in result.fetchall()]

    async def list_entries(
        self,
        db: AsyncSession,
        account_id: str,
        cursor_id: int | None,
        limit: int,
        kind: str | None,
    ) -> list[LedgerEntry]:
        result = await db.execute(
            _LIST_PAGE_SQL,
            {
                "account_id": account_id,
                "cursor_id": cursor_id,
                "kind": kind,
                "limit": limit,
            },
        )
        return [_row_to_entry(row) for row in result.fetchall()]
