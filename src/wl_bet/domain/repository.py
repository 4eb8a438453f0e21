"""Repository Protocol for bets — the service depends on this, tests mock it."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_bet.domain.models import Bet


class BetRepositoryProtocol(Protocol):
    async def insert_bet(
        self, db: AsyncSession, bet_id: str, account_id: str, amount: int
    ) -> Bet: ...

    async def get_bet(
        self, db: AsyncSession, bet_id: str, for_update: bool = False
    ) -> Bet | None: ...

    async def mark_settled(
        self, db: AsyncSession, bet_id: str, result: str, payout_amount: int
    ) -> Bet | None: ...

    async def list_bets_for_account(
        self, db: AsyncSession, account_id: str
    ) -> list[Bet]: ...

    async def list_open_bets(
        self, db: AsyncSession, after_bet_id: str | None, limit: int
    ) -> list[Bet]:
        """PLACED bets oldest first, strictly after after_bet_id when given."""
        ...
