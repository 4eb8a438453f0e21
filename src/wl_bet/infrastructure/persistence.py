"""BetRepository — concrete implementation of BetRepositoryProtocol.

A bet row is written twice in its life: INSERT at placement and one guarded
UPDATE at settlement (`WHERE status = 'PLACED'`). A result of 0 rows from
the guarded UPDATE means the bet was not in PLACED state.

Transaction ownership: The CALLER (application service) is responsible for
committing or rolling back.
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_bet.domain.models import Bet
from src.wl_common.errors import IntegrityViolationError

logger = logging.getLogger(__name__)

_BET_COLUMNS = (
    "id, account_id, amount, status, result, payout_amount, created_at, settled_at"
)

_INSERT_BET_SQL = text(f"""
    INSERT INTO bets (id, account_id, amount, status, result, payout_amount, created_at)
    VALUES (:id, :account_id, :amount, 'PLACED', NULL, 0, clock_timestamp())
    RETURNING {_BET_COLUMNS}
""")

_GET_BET_SQL = text(f"SELECT {_BET_COLUMNS} FROM bets WHERE id = :id")

_GET_BET_FOR_UPDATE_SQL = text(f"SELECT {_BET_COLUMNS} FROM bets WHERE id = :id FOR UPDATE")

_MARK_SETTLED_SQL = text(f"""
    UPDATE bets
    SET status = 'SETTLED',
        result = :result,
        payout_amount = :payout_amount,
        settled_at = clock_timestamp()
    WHERE id = :id AND status = 'PLACED'
    RETURNING {_BET_COLUMNS}
""")

_LIST_FOR_ACCOUNT_SQL = text(f"""
    SELECT {_BET_COLUMNS}
    FROM bets
    WHERE account_id = :account_id
    ORDER BY created_at DESC, id DESC
""")

_LIST_OPEN_SQL = text(f"""
    SELECT {_BET_COLUMNS}
    FROM bets
    WHERE status = 'PLACED'
      AND (
        CAST(:after_id AS VARCHAR) IS NULL
        OR (created_at, id) > (SELECT c.created_at, c.id FROM bets c WHERE c.id = :after_id)
      )
    ORDER BY created_at ASC, id ASC
    LIMIT :limit
""")


def _row_to_bet(row: object) -> Bet:
    return Bet(
        id=row.id,  # type: ignore[attr-defined]
        account_id=row.account_id,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        result=row.result,  # type: ignore[attr-defined]
        payout_amount=row.payout_amount,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        settled_at=row.settled_at,  # type: ignore[attr-defined]
    )


class BetRepository:
    async def insert_bet(
        self, db: AsyncSession, bet_id: str, account_id: str, amount: int
    ) -> Bet:
        try:
            result = await db.execute(
                _INSERT_BET_SQL,
                {"id": bet_id, "account_id": account_id, "amount": amount},
            )
        except IntegrityError as exc:
            logger.error("Bet insert rejected by constraint: bet=%s account=%s", bet_id, account_id)
            raise IntegrityViolationError(
                "bet insert rejected by storage constraint",
                bet_id=bet_id,
                account_id=account_id,
            ) from exc
        row = result.fetchone()
        if row is None:
            raise IntegrityViolationError("bet insert returned no rows", bet_id=bet_id)
        return _row_to_bet(row)

    async def get_bet(
        self, db: AsyncSession, bet_id: str, for_update: bool = False
    ) -> Bet | None:
        sql = _GET_BET_FOR_UPDATE_SQL if for_update else _GET_BET_SQL
        result = await db.execute(sql, {"id": bet_id})
        row = result.fetchone()
        return _row_to_bet(row) if row else None

    async def mark_settled(
        self, db: AsyncSession, bet_id: str, result: str, payout_amount: int
    ) -> Bet | None:
        try:
            res = await db.execute(
                _MARK_SETTLED_SQL,
                {"id": bet_id, "result": result, "payout_amount": payout_amount},
            )
        except IntegrityError as exc:
            logger.error("Bet settlement rejected by constraint: bet=%s", bet_id)
            raise IntegrityViolationError(
                "bet settlement rejected by storage constraint", bet_id=bet_id
            ) from exc
        row = res.fetchone()
        return _row_to_bet(row) if row else None

    async def list_bets_for_account(
        self, db: AsyncSession, account_id: str
    ) -> list[Bet]:
        result = await db.execute(_LIST_FOR_ACCOUNT_SQL, {"account_id": account_id})
        return [_row_to_bet(row) for row in result.fetchall()]

    async def list_open_bets(
        self, db: AsyncSession, after_bet_id: str | None, limit: int
    ) -> list[Bet]:
        result = await db.execute(
            _LIST_OPEN_SQL, {"after_id": after_bet_id, "limit": limit}
        )
        return [_row_to_bet(row) for row in result.fetchall()]
