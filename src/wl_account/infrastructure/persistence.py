"""AccountRepository — concrete implementation of AccountRepositoryProtocol.

Account rows go through the ORM mapping; the listing joins the ledger in a
single statement so every balance in one listing comes from one snapshot.

Transaction ownership: The CALLER (application service) commits or rolls back.
"""

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_account.domain.models import Account
from src.wl_account.infrastructure.db_models import AccountORM

_LIST_WITH_TOTALS_SQL = text("""
    SELECT a.id, a.display_name, a.created_at,
           e.kind, COALESCE(SUM(e.amount), 0) AS total
    FROM accounts a
    LEFT JOIN ledger_entries e ON e.account_id = a.id
    GROUP BY a.id, a.display_name, a.created_at, e.kind
""")


def _orm_to_account(orm: AccountORM) -> Account:
    return Account(id=orm.id, display_name=orm.display_name, created_at=orm.created_at)


class AccountRepository:
    async def create_account(
        self, db: AsyncSession, account_id: str, display_name: str
    ) -> Account:
        orm = AccountORM(id=account_id, display_name=display_name)
        db.add(orm)
        await db.flush()
        await db.refresh(orm)  # load server-side created_at
        return _orm_to_account(orm)

    async def get_account(self, db: AsyncSession, account_id: str) -> Account | None:
        result = await db.execute(select(AccountORM).where(AccountORM.id == account_id))
        orm = result.scalar_one_or_none()
        return _orm_to_account(orm) if orm else None

    async def list_accounts_with_totals(
        self, db: AsyncSession
    ) -> list[tuple[Account, dict[str, int]]]:
        result = await db.execute(_LIST_WITH_TOTALS_SQL)
        accounts: dict[str, tuple[Account, dict[str, int]]] = {}
        for row in result.fetchall():
            if row.id not in accounts:
                accounts[row.id] = (
                    Account(id=row.id, display_name=row.display_name, created_at=row.created_at),
                    {},
                )
            # LEFT JOIN yields kind=NULL for an account with no entries
            if row.kind is not None:
                accounts[row.id][1][row.kind] = int(row.total)
        return list(accounts.values())
