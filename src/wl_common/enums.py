"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class LedgerEntryKind(str, Enum):
    DEPOSIT = "DEPOSIT"
    BET_DEBIT = "BET_DEBIT"
    BET_CREDIT = "BET_CREDIT"


class BetStatus(str, Enum):
    PLACED = "PLACED"
    SETTLED = "SETTLED"


class BetResult(str, Enum):
    WIN = "WIN"
    LOSE = "LOSE"
    VOID = "VOID"
