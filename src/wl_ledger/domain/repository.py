"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_ledger.domain.models import LedgerEntry


class LedgerRepositoryProtocol(Protocol):
    async def lock_account(self, db: AsyncSession, account_id: str) -> bool: ...

    async def sum_by_kind(self, db: AsyncSession, account_id: str) -> dict[str, int]: ...

    async def insert_entry(
        self,
        db: AsyncSession,
        account_id: str,
        kind: str,
        amount: int,
        bet_id: str | None,
    ) -> LedgerEntry: ...

    async def list_all_entries(
        self, db: AsyncSession, account_id: str
    ) -> list[LedgerEntry]: ...

    async def list_entries(
        self,
        db: AsyncSession,
        account_id: str,
        cursor_id: int | None,
        limit: int,
        kind: str | None,
    ) -> list[LedgerEntry]: ...
