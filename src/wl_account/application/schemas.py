"""Pydantic schemas for wl_account API."""

from pydantic import BaseModel, Field, StrictInt

from src.wl_account.domain.models import Account
from src.wl_common.amounts import MAX_AMOUNT, amount_to_display


class CreateAccountRequest(BaseModel):
    display_name: str = Field(..., min_length=1, max_length=128)
    initial_deposit: StrictInt = Field(
        0, ge=0, le=MAX_AMOUNT, description="Optional opening DEPOSIT entry"
    )


class AccountSummary(BaseModel):
    account_id: str
    display_name: str
    balance: int
    balance_display: str
    created_at: str  # ISO8601 string

    @classmethod
    def from_account(cls, account: Account, balance: int) -> "AccountSummary":
        return cls(
            account_id=account.id,
            display_name=account.display_name,
            balance=balance,
            balance_display=amount_to_display(balance),
            created_at=account.created_at.isoformat() if account.created_at else "",
        )


class AccountListResponse(BaseModel):
    items: list[AccountSummary]
