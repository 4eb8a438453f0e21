"""Pydantic schemas for wl_bet API."""

from pydantic import BaseModel, Field, StrictInt

from src.wl_bet.domain.models import Bet
from src.wl_common.amounts import MAX_AMOUNT, amount_to_display
from src.wl_common.enums import BetResult

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PlaceBetRequest(BaseModel):
    amount: StrictInt = Field(..., gt=0, le=MAX_AMOUNT, description="Stake to wager")


class SettleBetRequest(BaseModel):
    result: BetResult


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BetItem(BaseModel):
    id: str
    account_id: str
    amount: int
    amount_display: str
    status: str
    result: str | None
    payout_amount: int
    payout_display: str
    created_at: str            # ISO8601 string
    settled_at: str | None     # ISO8601 string, null until settled

    @classmethod
    def from_bet(cls, bet: Bet) -> "BetItem":
        return cls(
            id=bet.id,
            account_id=bet.account_id,
            amount=bet.amount,
            amount_display=amount_to_display(bet.amount),
            status=bet.status,
            result=bet.result,
            payout_amount=bet.payout_amount,
            payout_display=amount_to_display(bet.payout_amount),
            created_at=bet.created_at.isoformat() if bet.created_at else "",
            settled_at=bet.settled_at.isoformat() if bet.settled_at else None,
        )


class PlaceBetResponse(BaseModel):
    bet_id: str
    bet: BetItem
    balance: int
    balance_display: str

    @classmethod
    def from_result(cls, bet: Bet, balance: int) -> "PlaceBetResponse":
        return cls(
            bet_id=bet.id,
            bet=BetItem.from_bet(bet),
            balance=balance,
            balance_display=amount_to_display(balance),
        )


class SettleBetResponse(BaseModel):
    bet_id: str
    result: str
    payout_amount: int
    payout_display: str
    bet: BetItem
    balance: int
    balance_display: str

    @classmethod
    def from_result(cls, bet: Bet, balance: int) -> "SettleBetResponse":
        return cls(
            bet_id=bet.id,
            result=bet.result or "",
            payout_amount=bet.payout_amount,
            payout_display=amount_to_display(bet.payout_amount),
            bet=BetItem.from_bet(bet),
            balance=balance,
            balance_display=amount_to_display(balance),
        )


class BetListResponse(BaseModel):
    items: list[BetItem]


class OpenBetsResponse(BaseModel):
    """One page of PLACED bets, oldest first.

    next_cursor is the id of the last bet on the page; pass it back as
    `cursor` to continue. It is None once has_more is False.
    """

    items: list[BetItem]
    next_cursor: str | None
    has_more: bool
