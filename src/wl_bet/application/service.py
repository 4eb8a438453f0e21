"""BetService — bet lifecycle: place, settle, history.

place_bet and settle_bet each run as one transaction:

  place_bet:  lock account → fold balance → check → INSERT bet → INSERT BET_DEBIT
  settle_bet: lock bet → check PLACED → lock account → INSERT BET_CREDIT (payout > 0)
              → guarded UPDATE bet

Locks are always taken bet-before-account, so placement (account only) and
settlement (bet, then account) never wait on each other in a cycle. Any
exception rolls the whole transaction back and is re-raised.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.wl_bet.application.schemas import (
    BetItem,
    BetListResponse,
    OpenBetsResponse,
    PlaceBetResponse,
    SettleBetResponse,
)
from src.wl_bet.domain.repository import BetRepositoryProtocol
from src.wl_bet.domain.rules import compute_payout
from src.wl_bet.infrastructure.persistence import BetRepository
from src.wl_common.amounts import checked_add, validate_amount
from src.wl_common.enums import BetResult, LedgerEntryKind
from src.wl_common.errors import (
    AlreadySettledError,
    BetNotFoundError,
    InsufficientBalanceError,
    IntegrityViolationError,
)
from src.wl_common.id_generator import new_bet_id
from src.wl_ledger.application.service import LedgerService

logger = logging.getLogger(__name__)

OPEN_BETS_DEFAULT_LIMIT = 100
OPEN_BETS_MAX_LIMIT = 500


class BetService:
    def __init__(
        self,
        repo: BetRepositoryProtocol | None = None,
        ledger: LedgerService | None = None,
        win_multiplier: int | None = None,
    ) -> None:
        self._repo: BetRepositoryProtocol = repo or BetRepository()
        self._ledger = ledger or LedgerService()
        self._win_multiplier = (
            win_multiplier if win_multiplier is not None else settings.WIN_MULTIPLIER
        )
        if self._win_multiplier < 1:
            raise ValueError(f"win_multiplier must be >= 1, got {self._win_multiplier}")

    async def place_bet(
        self, db: AsyncSession, account_id: str, amount: int
    ) -> PlaceBetResponse:
        validate_amount(amount)
        try:
            await self._ledger.lock_account(db, account_id)
            available = await self._ledger.balance(db, account_id)
            if amount > available:
                raise InsufficientBalanceError(account_id, amount, available)
            bet = await self._repo.insert_bet(db, new_bet_id(), account_id, amount)
            await self._ledger.record(
                db, account_id, LedgerEntryKind.BET_DEBIT, amount, bet_id=bet.id
            )
            balance = checked_add(available, -amount)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Bet placed: bet=%s account=%s amount=%d balance=%d",
            bet.id, account_id, amount, balance,
        )
        return PlaceBetResponse.from_result(bet, balance)

    async def settle_bet(
        self, db: AsyncSession, bet_id: str, result: BetResult
    ) -> SettleBetResponse:
        result = BetResult(result)
        try:
            bet = await self._repo.get_bet(db, bet_id, for_update=True)
            if bet is None:
                raise BetNotFoundError(bet_id)
            if bet.is_settled:
                raise AlreadySettledError(bet_id, bet.result)

            payout = compute_payout(bet.amount, result, self._win_multiplier)
            await self._ledger.lock_account(db, bet.account_id)
            if payout > 0:
                await self._ledger.record(
                    db, bet.account_id, LedgerEntryKind.BET_CREDIT, payout, bet_id=bet.id
                )
            settled = await self._repo.mark_settled(db, bet.id, result.value, payout)
            if settled is None:
                raise IntegrityViolationError(
                    "bet left PLACED state while locked", bet_id=bet_id
                )
            balance = await self._ledger.balance(db, bet.account_id)
            await db.commit()
        except AlreadySettledError:
            await db.rollback()
            logger.warning("Settlement rejected, bet already settled: bet=%s", bet_id)
            raise
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Bet settled: bet=%s account=%s result=%s payout=%d balance=%d",
            settled.id, settled.account_id, result.value, payout, balance,
        )
        return SettleBetResponse.from_result(settled, balance)

    async def get_bet(self, db: AsyncSession, bet_id: str) -> BetItem:
        bet = await self._repo.get_bet(db, bet_id)
        if bet is None:
            raise BetNotFoundError(bet_id)
        return BetItem.from_bet(bet)

    async def history(self, db: AsyncSession, account_id: str) -> BetListResponse:
        """All bets of the account, most recent first."""
        bets = await self._repo.list_bets_for_account(db, account_id)
        return BetListResponse(items=[BetItem.from_bet(b) for b in bets])

    async def list_open_bets(
        self,
        db: AsyncSession,
        cursor: str | None = None,
        limit: int = OPEN_BETS_DEFAULT_LIMIT,
    ) -> OpenBetsResponse:
        """PLACED bets awaiting settlement, oldest first, one page at a time."""
        limit = max(1, min(limit, OPEN_BETS_MAX_LIMIT))
        bets = await self._repo.list_open_bets(db, cursor or None, limit + 1)
        has_more = len(bets) > limit
        page = bets[:limit]
        return OpenBetsResponse(
            items=[BetItem.from_bet(b) for b in page],
            next_cursor=page[-1].id if has_more and page else None,
            has_more=has_more,
        )
