"""Integration tests for the Radiswap API."""

import threading
from collections.abc import Iterator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from radiswap import __version__
from radiswap.api.endpoints import get_ledger
from radiswap.api.main import app
from radiswap.ledger import Ledger


@pytest.fixture
def ledger() -> Ledger:
    return Ledger()


@pytest.fixture
def client(ledger: Ledger) -> Iterator[TestClient]:
    """Create a test client backed by a fresh ledger."""
    app.dependency_overrides[get_ledger] = lambda: ledger
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def market(client: TestClient) -> dict[str, str]:
    """An account holding two resources and a 1000/1000 pool at 0.3%."""
    account = client.post("/accounts").json()["account"]
    resource_a = client.post(
        "/resources",
        json={"account": account, "initial_supply": "1000000", "name": "Token A", "symbol": "A"},
    ).json()["resource"]
    resource_b = client.post(
        "/resources",
        json={"account": account, "initial_supply": "1000000", "name": "Token B", "symbol": "B"},
    ).json()["resource"]
    response = client.post(
        "/pools",
        json={
            "account": account,
            "deposit_a": {"resource": resource_a, "amount": "1000"},
            "deposit_b": {"resource": resource_b, "amount": "1000"},
            "fee": "0.003",
        },
    )
    assert response.status_code == 201
    body = response.json()
    return {
        "account": account,
        "resource_a": resource_a,
        "resource_b": resource_b,
        "component": body["component"],
        "pool_units": body["pool_units"]["resource"],
    }


def balances(client: TestClient, account: str) -> dict[str, Decimal]:
    response = client.get(f"/accounts/{account}")
    assert response.status_code == 200
    return {resource: Decimal(amount) for resource, amount in response.json()["balances"].items()}


class TestHealth:
    def test_health_check(self, client):
        """Health endpoint returns ok."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestAccounts:
    def test_create_account_is_empty(self, client):
        response = client.post("/accounts")
        assert response.status_code == 201
        body = response.json()
        assert body["account"].startswith("account_")
        assert body["balances"] == {}

    def test_create_resource_deposits_supply(self, client):
        account = client.post("/accounts").json()["account"]
        response = client.post(
            "/resources",
            json={"account": account, "initial_supply": "42.5", "divisibility": 2},
        )
        assert response.status_code == 201
        resource = response.json()["resource"]
        assert balances(client, account) == {resource: Decimal("42.5")}


class TestPools:
    """Tests for pool endpoints."""

    def test_instantiate(self, client, market):
        state = client.get(f"/pools/{market['component']}").json()
        assert state["reserve_a"] == "1000"
        assert state["reserve_b"] == "1000"
        assert state["fee"] == "0.003"
        assert state["pool_unit_supply"] == "100"
        held = balances(client, market["account"])
        assert held[market["pool_units"]] == Decimal(100)
        assert held[market["resource_a"]] == Decimal(999000)

    def test_swap(self, client, market):
        response = client.post(
            f"/pools/{market['component']}/swap",
            json={
                "account": market["account"],
                "input": {"resource": market["resource_a"], "amount": "100"},
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["output"]["resource"] == market["resource_b"]
        assert Decimal(body["output"]["amount"]) == Decimal("90.661089388014913158")
        assert Decimal(body["state"]["reserve_a"]) == Decimal(1100)
        assert Decimal(body["state"]["reserve_b"]) == Decimal("909.338910611985086842")

    def test_add_liquidity_returns_leftover(self, client, market):
        response = client.post(
            f"/pools/{market['component']}/add-liquidity",
            json={
                "account": market["account"],
                "deposit_a": {"resource": market["resource_a"], "amount": "10"},
                "deposit_b": {"resource": market["resource_b"], "amount": "20"},
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["leftover_b"]["amount"]) == Decimal(10)
        assert Decimal(body["pool_units"]["amount"]) == Decimal(1)
        held = balances(client, market["account"])
        assert held[market["resource_b"]] == Decimal(999000 - 10)
        assert held[market["pool_units"]] == Decimal(101)

    def test_remove_liquidity(self, client, market):
        response = client.post(
            f"/pools/{market['component']}/remove-liquidity",
            json={
                "account": market["account"],
                "pool_units": {"resource": market["pool_units"], "amount": "25"},
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["output_a"]["amount"]) == Decimal(250)
        assert Decimal(body["output_b"]["amount"]) == Decimal(250)
        assert Decimal(body["state"]["pool_unit_supply"]) == Decimal(75)

    def test_remove_with_wrong_token_changes_nothing(self, client, market):
        before = balances(client, market["account"])
        response = client.post(
            f"/pools/{market['component']}/remove-liquidity",
            json={
                "account": market["account"],
                "pool_units": {"resource": market["resource_a"], "amount": "25"},
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == "WrongToken"
        assert balances(client, market["account"]) == before

    def test_swap_unsupported_asset_changes_nothing(self, client, market):
        stranger = client.post(
            "/resources", json={"account": market["account"], "initial_supply": "50"}
        ).json()["resource"]
        before = balances(client, market["account"])
        response = client.post(
            f"/pools/{market['component']}/swap",
            json={
                "account": market["account"],
                "input": {"resource": stranger, "amount": "5"},
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == "UnsupportedAsset"
        assert balances(client, market["account"]) == before
        state = client.get(f"/pools/{market['component']}").json()
        assert state["reserve_a"] == "1000"

    def test_swap_on_non_pool_component(self, client, market):
        response = client.post(
            f"/pools/{market['resource_a']}/swap",
            json={
                "account": market["account"],
                "input": {"resource": market["resource_a"], "amount": "5"},
            },
        )
        assert response.status_code == 404


class TestConcurrentReads:
    """Reads never observe a transaction half-way through."""

    @pytest.mark.parametrize("path", ["/pools/{component}", "/accounts/{account}"])
    def test_read_waits_for_transaction(self, client, ledger, market, path):
        entered = threading.Event()
        release = threading.Event()
        responses = []

        def writer():
            with ledger.transaction():
                entered.set()
                release.wait(timeout=5)

        def reader():
            responses.append(client.get(path.format(**market)))

        writer_thread = threading.Thread(target=writer)
        writer_thread.start()
        assert entered.wait(timeout=5)

        reader_thread = threading.Thread(target=reader)
        reader_thread.start()
        reader_thread.join(timeout=0.3)
        assert reader_thread.is_alive()
        assert responses == []

        release.set()
        writer_thread.join(timeout=5)
        reader_thread.join(timeout=5)
        assert responses[0].status_code == 200
