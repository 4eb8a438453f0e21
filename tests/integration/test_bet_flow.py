"""Integration tests for the account → deposit → bet → settle flow over HTTP.

Uses the session-scoped client fixture from tests/integration/conftest.py.
"""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = [pytest.mark.asyncio(loop_scope="session"), pytest.mark.integration]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_account(client: AsyncClient, initial_deposit: int = 0) -> str:
    resp = await client.post(
        "/api/v1/accounts",
        json={
            "display_name": f"Flow User {uuid.uuid4().hex[:8]}",
            "initial_deposit": initial_deposit,
        },
    )
    assert resp.status_code == 200
    return str(resp.json()["data"]["account_id"])


async def _balance(client: AsyncClient, account_id: str) -> int:
    resp = await client.get(f"/api/v1/accounts/{account_id}/balance")
    assert resp.status_code == 200
    return int(resp.json()["data"]["balance"])


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestAccounts:
    async def test_new_account_has_zero_balance(self, client: AsyncClient) -> None:
        account_id = await _create_account(client)
        assert await _balance(client, account_id) == 0

    async def test_unknown_account_balance_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/accounts/acc_does_not_exist/balance")
        assert resp.status_code == 404
        assert resp.json()["code"] == 1001

    async def test_list_accounts_includes_balance(self, client: AsyncClient) -> None:
        account_id = await _create_account(client, initial_deposit=250)
        resp = await client.get("/api/v1/accounts")
        assert resp.status_code == 200
        items = {i["account_id"]: i for i in resp.json()["data"]["items"]}
        assert items[account_id]["balance"] == 250


class TestDeposit:
    async def test_deposit_round_trip(self, client: AsyncClient) -> None:
        account_id = await _create_account(client, initial_deposit=10)
        before = await _balance(client, account_id)

        resp = await client.post(f"/api/v1/accounts/{account_id}/deposit", json={"amount": 37})

        assert resp.status_code == 200
        assert resp.json()["data"]["ledger_entry_id"] > 0
        assert await _balance(client, account_id) == before + 37

    async def test_deposit_unknown_account_is_404(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/accounts/acc_nope/deposit", json={"amount": 10})
        assert resp.status_code == 404

    async def test_deposit_zero_rejected(self, client: AsyncClient) -> None:
        account_id = await _create_account(client)
        resp = await client.post(f"/api/v1/accounts/{account_id}/deposit", json={"amount": 0})
        assert resp.status_code == 422


class TestBetScenarios:
    async def test_place_then_win(self, client: AsyncClient) -> None:
        account_id = await _create_account(client, initial_deposit=100)

        resp = await client.post(f"/api/v1/accounts/{account_id}/bets", json={"amount": 60})
        assert resp.status_code == 200
        placed = resp.json()["data"]
        assert placed["bet"]["status"] == "PLACED"
        assert placed["balance"] == 40
        assert await _balance(client, account_id) == 40

        resp = await client.post(f"/api/v1/bets/{placed['bet_id']}/settle", json={"result": "WIN"})
        assert resp.status_code == 200
        settled = resp.json()["data"]
        assert settled["payout_amount"] == 120
        assert settled["bet"]["status"] == "SETTLED"
        assert settled["bet"]["settled_at"] is not None
        assert await _balance(client, account_id) == 160

    async def test_insufficient_balance_leaves_balance(self, client: AsyncClient) -> None:
        account_id = await _create_account(client, initial_deposit=50)

        resp = await client.post(f"/api/v1/accounts/{account_id}/bets", json={"amount": 51})

        assert resp.status_code == 422
        assert resp.json()["code"] == 2002
        assert await _balance(client, account_id) == 50
        history = await client.get(f"/api/v1/accounts/{account_id}/bets")
        assert history.json()["data"]["items"] == []

    @pytest.mark.parametrize(("result", "payout", "final"), [("LOSE", 0, 70), ("VOID", 30, 100)])
    async def test_lose_and_void(
        self, client: AsyncClient, result: str, payout: int, final: int
    ) -> None:
        account_id = await _create_account(client, initial_deposit=100)
        resp = await client.post(f"/api/v1/accounts/{account_id}/bets", json={"amount": 30})
        bet_id = resp.json()["data"]["bet_id"]

        resp = await client.post(f"/api/v1/bets/{bet_id}/settle", json={"result": result})

        assert resp.json()["data"]["payout_amount"] == payout
        assert await _balance(client, account_id) == final

    async def test_second_settlement_rejected(self, client: AsyncClient) -> None:
        account_id = await _create_account(client, initial_deposit=100)
        resp = await client.post(f"/api/v1/accounts/{account_id}/bets", json={"amount": 10})
        bet_id = resp.json()["data"]["bet_id"]

        first = await client.post(f"/api/v1/bets/{bet_id}/settle", json={"result": "WIN"})
        second = await client.post(f"/api/v1/bets/{bet_id}/settle", json={"result": "WIN"})

        assert first.status_code == 200
        assert second.status_code == 409
        assert await _balance(client, account_id) == 110

    async def test_settle_unknown_bet_is_404(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/bets/bet_missing/settle", json={"result": "WIN"})
        assert resp.status_code == 404
        assert resp.json()["code"] == 3001

    async def test_history_newest_first(self, client: AsyncClient) -> None:
        account_id = await _create_account(client, initial_deposit=100)
        ids = []
        for amount in (1, 2, 3):
            resp = await client.post(
                f"/api/v1/accounts/{account_id}/bets", json={"amount": amount}
            )
            ids.append(resp.json()["data"]["bet_id"])

        resp = await client.get(f"/api/v1/accounts/{account_id}/bets")

        assert [b["id"] for b in resp.json()["data"]["items"]] == list(reversed(ids))

    async def test_ledger_trail_links_bet(self, client: AsyncClient) -> None:
        account_id = await _create_account(client, initial_deposit=100)
        resp = await client.post(f"/api/v1/accounts/{account_id}/bets", json={"amount": 60})
        bet_id = resp.json()["data"]["bet_id"]
        await client.post(f"/api/v1/bets/{bet_id}/settle", json={"result": "VOID"})

        resp = await client.get(f"/api/v1/accounts/{account_id}/ledger")

        items = resp.json()["data"]["items"]
        assert [(i["kind"], i["signed_amount"], i["bet_id"]) for i in items] == [
            ("BET_CREDIT", 60, bet_id),
            ("BET_DEBIT", -60, bet_id),
            ("DEPOSIT", 100, None),
        ]

    async def test_open_bets_pages_in_placement_order(self, client: AsyncClient) -> None:
        account_id = await _create_account(client, initial_deposit=100)
        ids = []
        for amount in (1, 2, 3):
            resp = await client.post(
                f"/api/v1/accounts/{account_id}/bets", json={"amount": amount}
            )
            ids.append(resp.json()["data"]["bet_id"])
        await client.post(f"/api/v1/bets/{ids[1]}/settle", json={"result": "LOSE"})

        seen: list[str] = []
        cursor = None
        while True:
            params = {"limit": 2} | ({"cursor": cursor} if cursor else {})
            data = (await client.get("/api/v1/bets/open", params=params)).json()["data"]
            assert len(data["items"]) <= 2
            seen.extend(b["id"] for b in data["items"])
            if not data["has_more"]:
                assert data["next_cursor"] is None
                break
            cursor = data["next_cursor"]

        assert len(seen) == len(set(seen))
        assert [i for i in seen if i in ids] == [ids[0], ids[2]]
