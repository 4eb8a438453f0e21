"""Balance folding rules.

balance = sum(DEPOSIT) + sum(BET_CREDIT) - sum(BET_DEBIT)

Amounts are stored unsigned; the entry kind decides the sign. A balance
outside the 64-bit range raises IntegrityViolationError. Per-kind totals may
exceed that range on their own (DEPOSIT and BET_DEBIT both near the limit),
so they are summed exactly and only the net is checked.
"""

from collections.abc import Iterable, Mapping

from src.wl_common.amounts import checked_add, checked_sum
from src.wl_common.enums import LedgerEntryKind
from src.wl_common.errors import IntegrityViolationError
from src.wl_ledger.domain.models import LedgerEntry

_SIGN: dict[str, int] = {
    LedgerEntryKind.DEPOSIT: 1,
    LedgerEntryKind.BET_CREDIT: 1,
    LedgerEntryKind.BET_DEBIT: -1,
}


def signed_amount(kind: str, amount: int) -> int:
    """Contribution of one entry to the balance."""
    try:
        sign = _SIGN[LedgerEntryKind(kind)]
    except ValueError:
        raise IntegrityViolationError(f"unknown ledger entry kind {kind!r}") from None
    if amount <= 0:
        raise IntegrityViolationError(
            f"stored ledger amount must be positive, got {amount}", kind=kind
        )
    return sign * amount


def fold_balance(entries: Iterable[LedgerEntry]) -> int:
    """Fold entries in creation order; 0 for no entries."""
    balance = 0
    for entry in entries:
        balance = checked_add(balance, signed_amount(entry.kind, entry.amount))
    return balance


def fold_kind_totals(totals: Mapping[str, int]) -> int:
    """Fold per-kind SUM(amount) aggregates into a balance."""
    return checked_sum(
        signed_amount(kind, total) for kind, total in totals.items() if total != 0
    )
