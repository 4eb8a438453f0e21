"""Integer arithmetic utilities for ledger amounts.

All amounts and balances are int in whole currency units. No float, no Decimal.
Every stored amount must fit the BIGINT columns, so arithmetic on the way
in is checked against the signed 64-bit range.
"""

from collections.abc import Iterable

from src.wl_common.errors import IntegrityViolationError, InvalidAmountError

MAX_AMOUNT = 2**63 - 1
MIN_AMOUNT = -(2**63)


def validate_amount(amount: object) -> int:
    """Return amount if it is a positive int within BIGINT, else raise InvalidAmountError."""
    # bool is an int subclass; True is not a wager
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(amount)
    if amount <= 0 or amount > MAX_AMOUNT:
        raise InvalidAmountError(amount)
    return amount


def _check_range(value: int, op: str) -> int:
    if not (MIN_AMOUNT <= value <= MAX_AMOUNT):
        raise IntegrityViolationError(f"{op} overflows 64-bit amount range", value=str(value))
    return value


def checked_add(a: int, b: int) -> int:
    return _check_range(a + b, "addition")


def checked_sum(values: Iterable[int]) -> int:
    """Exact sum of all values; only the result is range-checked."""
    return _check_range(sum(values), "sum")


def checked_mul(a: int, b: int) -> int:
    return _check_range(a * b, "multiplication")


def amount_to_display(amount: int) -> str:
    """Convert an amount to display string: 1000 -> '$1,000', -60 -> '-$60'."""
    if amount < 0:
        return f"-${-amount:,}"
    return f"${amount:,}"
