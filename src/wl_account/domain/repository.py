"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_account.domain.models import Account


class AccountRepositoryProtocol(Protocol):
    async def create_account(
        self, db: AsyncSession, account_id: str, display_name: str
    ) -> Account: ...

    async def get_account(self, db: AsyncSession, account_id: str) -> Account | None: ...

    async def list_accounts_with_totals(
        self, db: AsyncSession
    ) -> list[tuple[Account, dict[str, int]]]: ...
