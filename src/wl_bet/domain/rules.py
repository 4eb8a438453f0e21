"""Payout policy.

WIN  → amount × win_multiplier
LOSE → 0
VOID → amount (stake refunded, no profit or loss)
"""

from src.wl_common.amounts import checked_mul
from src.wl_common.enums import BetResult

DEFAULT_WIN_MULTIPLIER = 2


def compute_payout(
    amount: int,
    result: BetResult,
    win_multiplier: int = DEFAULT_WIN_MULTIPLIER,
) -> int:
    result = BetResult(result)
    if result is BetResult.WIN:
        return checked_mul(amount, win_multiplier)
    if result is BetResult.VOID:
        return amount
    return 0
