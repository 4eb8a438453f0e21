"""Unit tests for AccountService using a mock repository and mock ledger."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.wl_account.application.schemas import AccountListResponse, AccountSummary
from src.wl_account.application.service import AccountService
from src.wl_account.domain.models import Account
from src.wl_common.enums import LedgerEntryKind
from src.wl_common.errors import AccountNotFoundError, InvalidAmountError
from src.wl_ledger.application.schemas import BalanceResponse
from src.wl_ledger.application.service import LedgerService


def _make_account(account_id: str = "acc_1", name: str = "Test User 1") -> Account:
    return Account(id=account_id, display_name=name, created_at=datetime.now(UTC))


class TestCreateAccount:
    async def test_with_initial_deposit(self) -> None:
        repo = AsyncMock()
        repo.create_account.side_effect = lambda db, account_id, name: _make_account(
            account_id, name
        )
        ledger = AsyncMock(spec=LedgerService)
        svc = AccountService(repo=repo, ledger=ledger)
        db = AsyncMock()

        result = await svc.create_account(db, "Test User 1", initial_deposit=1000)

        assert isinstance(result, AccountSummary)
        assert result.account_id.startswith("acc_")
        assert result.balance == 1000
        assert result.balance_display == "$1,000"
        ledger.record.assert_awaited_once_with(
            db, result.account_id, LedgerEntryKind.DEPOSIT, 1000
        )
        db.commit.assert_awaited_once()

    async def test_without_initial_deposit_writes_no_entry(self) -> None:
        repo = AsyncMock()
        repo.create_account.return_value = _make_account()
        ledger = AsyncMock(spec=LedgerService)
        svc = AccountService(repo=repo, ledger=ledger)
        db = AsyncMock()

        result = await svc.create_account(db, "Test User 1")

        assert result.balance == 0
        ledger.record.assert_not_awaited()
        db.commit.assert_awaited_once()

    async def test_negative_initial_deposit_rejected(self) -> None:
        repo = AsyncMock()
        svc = AccountService(repo=repo, ledger=AsyncMock(spec=LedgerService))

        with pytest.raises(InvalidAmountError):
            await svc.create_account(AsyncMock(), "x", initial_deposit=-1)
        repo.create_account.assert_not_awaited()

    async def test_deposit_failure_rolls_back_account(self) -> None:
        repo = AsyncMock()
        repo.create_account.return_value = _make_account()
        ledger = AsyncMock(spec=LedgerService)
        ledger.record.side_effect = RuntimeError("db down")
        svc = AccountService(repo=repo, ledger=ledger)
        db = AsyncMock()

        with pytest.raises(RuntimeError):
            await svc.create_account(db, "Test User 1", initial_deposit=10)
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestGetBalance:
    async def test_returns_balance(self) -> None:
        repo = AsyncMock()
        repo.get_account.return_value = _make_account()
        ledger = AsyncMock(spec=LedgerService)
        ledger.balance.return_value = 160
        svc = AccountService(repo=repo, ledger=ledger)

        result = await svc.get_balance(MagicMock(), "acc_1")

        assert isinstance(result, BalanceResponse)
        assert result.balance == 160
        assert result.balance_display == "$160"

    async def test_unknown_account(self) -> None:
        repo = AsyncMock()
        repo.get_account.return_value = None
        ledger = AsyncMock(spec=LedgerService)
        svc = AccountService(repo=repo, ledger=ledger)

        with pytest.raises(AccountNotFoundError):
            await svc.get_balance(MagicMock(), "acc_x")
        ledger.balance.assert_not_awaited()

    async def test_get_account_unknown(self) -> None:
        repo = AsyncMock()
        repo.get_account.return_value = None
        svc = AccountService(repo=repo, ledger=AsyncMock(spec=LedgerService))

        with pytest.raises(AccountNotFoundError):
            await svc.get_account(MagicMock(), "acc_x")


class TestListAccounts:
    async def test_folds_and_orders(self) -> None:
        repo = AsyncMock()
        repo.list_accounts_with_totals.return_value = [
            (_make_account("acc_10", "Test User 10"), {"DEPOSIT": 1000, "BET_DEBIT": 60}),
            (_make_account("acc_2", "Test User 2"), {}),
            (_make_account("acc_1", "Test User 1"), {"DEPOSIT": 100, "BET_CREDIT": 120}),
        ]
        svc = AccountService(repo=repo, ledger=AsyncMock(spec=LedgerService))

        result = await svc.list_accounts(MagicMock())

        assert isinstance(result, AccountListResponse)
        assert [(i.account_id, i.balance) for i in result.items] == [
            ("acc_1", 220),
            ("acc_2", 0),
            ("acc_10", 940),
        ]
