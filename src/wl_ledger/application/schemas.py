"""Pydantic schemas and cursor utilities for wl_ledger API."""

import base64
import json

from pydantic import BaseModel, Field, StrictInt

from src.wl_common.amounts import MAX_AMOUNT, amount_to_display
from src.wl_ledger.domain.models import LedgerEntry
from src.wl_ledger.domain.rules import signed_amount

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None if malformed."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode(), validate=True).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class DepositRequest(BaseModel):
    amount: StrictInt = Field(..., gt=0, le=MAX_AMOUNT, description="Amount to deposit")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    account_id: str
    balance: int
    balance_display: str

    @classmethod
    def from_balance(cls, account_id: str, balance: int) -> "BalanceResponse":
        return cls(
            account_id=account_id,
            balance=balance,
            balance_display=amount_to_display(balance),
        )


class DepositResponse(BaseModel):
    account_id: str
    ledger_entry_id: int
    deposited: int
    deposited_display: str
    balance: int
    balance_display: str

    @classmethod
    def from_result(cls, entry: LedgerEntry, balance: int) -> "DepositResponse":
        return cls(
            account_id=entry.account_id,
            ledger_entry_id=entry.id,
            deposited=entry.amount,
            deposited_display=amount_to_display(entry.amount),
            balance=balance,
            balance_display=amount_to_display(balance),
        )


class LedgerEntryItem(BaseModel):
    id: int
    kind: str
    amount: int
    signed_amount: int
    amount_display: str
    bet_id: str | None
    created_at: str  # ISO8601 string

    @classmethod
    def from_entry(cls, entry: LedgerEntry) -> "LedgerEntryItem":
        signed = signed_amount(entry.kind, entry.amount)
        return cls(
            id=entry.id,
            kind=entry.kind,
            amount=entry.amount,
            signed_amount=signed,
            amount_display=amount_to_display(signed),
            bet_id=entry.bet_id,
            created_at=entry.created_at.isoformat() if entry.created_at else "",
        )


class LedgerResponse(BaseModel):
    items: list[LedgerEntryItem]
    next_cursor: str | None
    has_more: bool
