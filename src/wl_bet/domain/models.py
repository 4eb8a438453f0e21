"""Domain models for wl_bet — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.wl_common.enums import BetStatus


@dataclass
class Bet:
    id: str
    account_id: str
    amount: int                      # fixed at placement, > 0
    status: str                      # BetStatus value
    result: str | None = None        # BetResult value once settled
    payout_amount: int = 0           # 0 until settled
    created_at: datetime | None = None
    settled_at: datetime | None = None

    @property
    def is_settled(self) -> bool:
        return self.status == BetStatus.SETTLED
