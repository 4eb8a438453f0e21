"""LedgerService — the ledger engine.

`balance` and `record` are building blocks: they run inside the caller's
transaction and never commit. `deposit` owns its transaction: it locks the
account row, appends the entry and commits, or rolls back on any error.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_common.amounts import validate_amount
from src.wl_common.enums import LedgerEntryKind
from src.wl_common.errors import AccountNotFoundError, IntegrityViolationError
from src.wl_ledger.application.schemas import (
    DepositResponse,
    LedgerEntryItem,
    LedgerResponse,
    cursor_decode,
    cursor_encode,
)
from src.wl_ledger.domain.models import LedgerEntry
from src.wl_ledger.domain.repository import LedgerRepositoryProtocol
from src.wl_ledger.domain.rules import fold_balance, fold_kind_totals
from src.wl_ledger.infrastructure.persistence import LedgerRepository

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(self, repo: LedgerRepositoryProtocol | None = None) -> None:
        self._repo: LedgerRepositoryProtocol = repo or LedgerRepository()

    async def balance(self, db: AsyncSession, account_id: str) -> int:
        """Fold every entry of the account. Recomputed on each call, never cached."""
        totals = await self._repo.sum_by_kind(db, account_id)
        return fold_kind_totals(totals)

    async def lock_account(self, db: AsyncSession, account_id: str) -> None:
        """Take the per-account row lock for the rest of the caller's transaction."""
        if not await self._repo.lock_account(db, account_id):
            raise AccountNotFoundError(account_id)

    async def record(
        self,
        db: AsyncSession,
        account_id: str,
        kind: LedgerEntryKind,
        amount: int,
        bet_id: str | None = None,
    ) -> LedgerEntry:
        """Append one immutable entry in the caller's transaction."""
        validate_amount(amount)
        return await self._repo.insert_entry(
            db, account_id, LedgerEntryKind(kind).value, amount, bet_id
        )

    async def deposit(
        self, db: AsyncSession, account_id: str, amount: int
    ) -> DepositResponse:
        validate_amount(amount)
        try:
            await self.lock_account(db, account_id)
            entry = await self.record(db, account_id, LedgerEntryKind.DEPOSIT, amount)
            balance = await self.balance(db, account_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Deposit: account=%s amount=%d entry=%d balance=%d",
            account_id, amount, entry.id, balance,
        )
        return DepositResponse.from_result(entry, balance)

    async def verify_balance(self, db: AsyncSession, account_id: str) -> int:
        """Recompute the balance entry by entry and compare it with the aggregate path."""
        entries = await self._repo.list_all_entries(db, account_id)
        folded = fold_balance(entries)
        aggregated = await self.balance(db, account_id)
        if folded != aggregated:
            logger.error(
                "Balance mismatch: account=%s folded=%d aggregated=%d entries=%d",
                account_id, folded, aggregated, len(entries),
            )
            raise IntegrityViolationError(
                "balance fold mismatch",
                account_id=account_id,
                folded=folded,
                aggregated=aggregated,
            )
        return folded

    async def list_ledger(
        self,
        db: AsyncSession,
        account_id: str,
        cursor: str | None,
        limit: int,
        kind: str | None,
    ) -> LedgerResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        entries = await self._repo.list_entries(db, account_id, cursor_id, limit + 1, kind)
        has_more = len(entries) > limit
        page = entries[:limit]

        items = [LedgerEntryItem.from_entry(e) for e in page]
        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return LedgerResponse(items=items, next_cursor=next_cursor, has_more=has_more)
