"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Account directory
  2xxx: Ledger
  3xxx: Bet
  9xxx: System

Every error carries `kind` (stable name) and `context` (the ids and amounts
involved) so callers can decide whether to retry, inform the user, or alert
an operator.
"""

from typing import Any


class AppError(Exception):
    """Base application error."""

    kind: str = "APP_ERROR"

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.context: dict[str, Any] = context or {}
        super().__init__(message)


# --- 1xxx: Account directory ---

class AccountNotFoundError(AppError):
    kind = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str) -> None:
        super().__init__(
            1001,
            f"Account not found: {account_id}",
            404,
            {"account_id": account_id},
        )


# --- 2xxx: Ledger ---

class InvalidAmountError(AppError):
    kind = "INVALID_AMOUNT"

    def __init__(self, amount: object) -> None:
        super().__init__(
            2001,
            f"Amount must be a positive integer, got {amount!r}",
            422,
            {"amount": amount},
        )


class InsufficientBalanceError(AppError):
    kind = "INSUFFICIENT_BALANCE"

    def __init__(self, account_id: str, required: int, available: int) -> None:
        super().__init__(
            2002,
            f"Insufficient balance: required {required}, available {available}",
            422,
            {"account_id": account_id, "required": required, "available": available},
        )


# --- 3xxx: Bet ---

class BetNotFoundError(AppError):
    kind = "BET_NOT_FOUND"

    def __init__(self, bet_id: str) -> None:
        super().__init__(3001, f"Bet not found: {bet_id}", 404, {"bet_id": bet_id})


class AlreadySettledError(AppError):
    kind = "ALREADY_SETTLED"

    def __init__(self, bet_id: str, result: str | None = None) -> None:
        super().__init__(
            3002,
            f"Bet already settled: {bet_id}",
            409,
            {"bet_id": bet_id, "result": result},
        )


# --- 9xxx: System ---

class IntegrityViolationError(AppError):
    """A ledger or bet invariant is broken. Fatal, never retry."""

    kind = "INTEGRITY_VIOLATION"

    def __init__(self, detail: str, **context: Any) -> None:
        super().__init__(9001, f"Integrity violation: {detail}", 500, context)


class InternalError(AppError):
    kind = "INTERNAL_ERROR"

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
