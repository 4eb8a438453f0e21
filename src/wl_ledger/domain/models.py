"""Domain models for wl_ledger — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LedgerEntry:
    id: int                          # BIGSERIAL
    account_id: str
    kind: str                        # LedgerEntryKind value
    amount: int                      # always > 0; sign comes from kind
    bet_id: str | None = None        # set for BET_DEBIT / BET_CREDIT
    created_at: datetime | None = None
