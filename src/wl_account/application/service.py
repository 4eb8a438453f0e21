"""AccountService — the account directory and the balance read surface.

create_account manages its own transaction (account row plus optional
opening DEPOSIT entry commit together). Reads run without an explicit
transaction.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_account.application.schemas import AccountListResponse, AccountSummary
from src.wl_account.domain.ordering import display_sort_key
from src.wl_account.domain.repository import AccountRepositoryProtocol
from src.wl_account.infrastructure.persistence import AccountRepository
from src.wl_common.amounts import validate_amount
from src.wl_common.enums import LedgerEntryKind
from src.wl_common.errors import AccountNotFoundError
from src.wl_common.id_generator import new_account_id
from src.wl_ledger.application.schemas import BalanceResponse
from src.wl_ledger.application.service import LedgerService
from src.wl_ledger.domain.rules import fold_kind_totals

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol | None = None,
        ledger: LedgerService | None = None,
    ) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()
        self._ledger = ledger or LedgerService()

    async def create_account(
        self, db: AsyncSession, display_name: str, initial_deposit: int = 0
    ) -> AccountSummary:
        # 0 means "no opening entry"; anything else must be a valid amount
        if initial_deposit != 0 or isinstance(initial_deposit, bool):
            validate_amount(initial_deposit)
        try:
            account = await self._repo.create_account(db, new_account_id(), display_name)
            if initial_deposit > 0:
                await self._ledger.record(
                    db, account.id, LedgerEntryKind.DEPOSIT, initial_deposit
                )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Account created: account=%s name=%r initial_deposit=%d",
            account.id, display_name, initial_deposit,
        )
        return AccountSummary.from_account(account, initial_deposit)

    async def get_account(self, db: AsyncSession, account_id: str) -> AccountSummary:
        account = await self._repo.get_account(db, account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        balance = await self._ledger.balance(db, account_id)
        return AccountSummary.from_account(account, balance)

    async def get_balance(self, db: AsyncSession, account_id: str) -> BalanceResponse:
        if await self._repo.get_account(db, account_id) is None:
            raise AccountNotFoundError(account_id)
        balance = await self._ledger.balance(db, account_id)
        return BalanceResponse.from_balance(account_id, balance)

    async def list_accounts(self, db: AsyncSession) -> AccountListResponse:
        rows = await self._repo.list_accounts_with_totals(db)
        rows.sort(key=lambda pair: display_sort_key(pair[0].display_name))
        return AccountListResponse(
            items=[
                AccountSummary.from_account(account, fold_kind_totals(totals))
                for account, totals in rows
            ]
        )
