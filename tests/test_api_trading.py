"""
Tests for the trading API endpoints.

Routes run against a fresh in-memory SQLite database injected
through dependency overrides. Validates request validation,
response schemas, and error mapping.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from crossexchange.domain.trading.errors import ConcurrentPortfolioUpdateError
from crossexchange.interfaces.trading.dependencies import (
    get_engine,
    get_execute_buy_use_case,
    get_list_trades_use_case,
)
from crossexchange.main import app
from crossexchange.shared.security.headers import SECURE_HEADERS
from crossexchange.shared.security.rate_limiting import limiter

PORTFOLIO_NOT_FOUND = "There is no such kind of registered portfolio."
SHARE_NOT_FOUND = "There is no such kind of registered share."
NO_SUCH_HOLDING = "You do not have this kind of share to sell."
NOT_ENOUGH_SHARES = "There are not enough share to sell."


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _portfolio(client: TestClient, name: str = "Ahror") -> int:
    response = client.post("/api/Portfolio", json={"Name": name})
    assert response.status_code == 201
    return response.json()["Id"]


def _quote(client: TestClient, symbol: str = "ABC", rate: float = 90, at: str | None = None) -> None:
    body: dict = {"Symbol": symbol, "Rate": rate}
    if at is not None:
        body["TimeStamp"] = at
    response = client.post("/api/Share", json=body)
    assert response.status_code == 201


def _trade(client: TestClient, side: str, portfolio_id: int, symbol: str, shares: int):
    return client.post(
        f"/api/Trade/{side}",
        json={"Symbol": symbol, "NoOfShares": shares, "PortfolioId": portfolio_id},
    )


class TestHealthEndpoint:
    def test_health(self, client) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["database"] == "ok"

    def test_unreachable_database_reported_degraded(self, client) -> None:
        engine = MagicMock()
        engine.connect.side_effect = OperationalError("SELECT 1", {}, Exception("db down"))
        app.dependency_overrides[get_engine] = lambda: engine

        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["database"] == "unavailable"


class TestBuyEndpoint:
    """Tests for POST /api/Trade/buy."""

    def test_unknown_portfolio_rejected(self, client) -> None:
        _quote(client)
        response = _trade(client, "buy", 1, "ABC", 10)
        assert response.status_code == 400
        assert response.json() == {"error": PORTFOLIO_NOT_FOUND}

    def test_unknown_share_rejected(self, client) -> None:
        portfolio_id = _portfolio(client)
        response = _trade(client, "buy", portfolio_id, "CBA", 10)
        assert response.status_code == 400
        assert response.json() == {"error": SHARE_NOT_FOUND}
        assert client.get(f"/api/Trade/{portfolio_id}").json() == []

    def test_portfolio_checked_before_share(self, client) -> None:
        response = _trade(client, "buy", 99, "CBA", 10)
        assert response.json() == {"error": PORTFOLIO_NOT_FOUND}

    def test_valid_buy_returns_created_trade(self, client) -> None:
        portfolio_id = _portfolio(client)
        _quote(client, "ABC", 90)

        response = _trade(client, "buy", portfolio_id, "ABC", 10)
        assert response.status_code == 201
        body = response.json()
        assert body["Symbol"] == "ABC"
        assert body["Action"] == "BUY"
        assert body["NoOfShares"] == 10
        assert body["PortfolioId"] == portfolio_id
        assert Decimal(str(body["Price"])) == Decimal("900")

        trades = client.get(f"/api/Trade/{portfolio_id}").json()
        assert trades[-1] == body

    def test_buy_uses_latest_rate(self, client) -> None:
        portfolio_id = _portfolio(client)
        _quote(client, "ABC", 80, "2024-01-01T10:00:00Z")
        _quote(client, "ABC", 95, "2024-01-01T12:00:00Z")
        _quote(client, "ABC", 90, "2024-01-01T11:00:00Z")

        body = _trade(client, "buy", portfolio_id, "ABC", 2).json()
        assert Decimal(str(body["Price"])) == Decimal("190")

    def test_snake_case_body_accepted(self, client) -> None:
        portfolio_id = _portfolio(client)
        _quote(client)
        response = client.post(
            "/api/Trade/buy",
            json={"symbol": "ABC", "no_of_shares": 1, "portfolio_id": portfolio_id},
        )
        assert response.status_code == 201

    @pytest.mark.parametrize(
        "body",
        [
            {"Symbol": "ABC", "NoOfShares": 0, "PortfolioId": 1},
            {"Symbol": "ABC", "NoOfShares": -5, "PortfolioId": 1},
            {"Symbol": "abc", "NoOfShares": 1, "PortfolioId": 1},
            {"Symbol": "ABC", "PortfolioId": 1},
            {"NoOfShares": 1, "PortfolioId": 1},
        ],
    )
    def test_invalid_body_rejected(self, client, body) -> None:
        assert client.post("/api/Trade/buy", json=body).status_code == 422


class TestSellEndpoint:
    """Tests for POST /api/Trade/sell."""

    @pytest.fixture
    def holding(self, client) -> int:
        """A portfolio with ten BUY trades of 2 ABC shares at 90."""
        portfolio_id = _portfolio(client)
        _quote(client, "ABC", 90)
        for _ in range(10):
            assert _trade(client, "buy", portfolio_id, "ABC", 2).status_code == 201
        return portfolio_id

    def test_unknown_share_rejected(self, client) -> None:
        _quote(client, "ABC", 90)
        response = _trade(client, "sell", 1, "CBA", 1)
        assert response.status_code == 400
        assert response.json() == {"error": SHARE_NOT_FOUND}

    def test_share_checked_before_portfolio(self, client) -> None:
        response = _trade(client, "sell", 99, "CBA", 1)
        assert response.json() == {"error": SHARE_NOT_FOUND}

    def test_unknown_portfolio_rejected(self, client) -> None:
        _quote(client, "ABC", 90)
        response = _trade(client, "sell", 99, "ABC", 1)
        assert response.status_code == 400
        assert response.json() == {"error": PORTFOLIO_NOT_FOUND}

    def test_no_holding_rejected(self, client, holding) -> None:
        _quote(client, "XYZ", 15)
        response = _trade(client, "sell", holding, "XYZ", 1)
        assert response.status_code == 400
        assert response.json() == {"error": NO_SUCH_HOLDING}

    def test_not_enough_shares_rejected(self, client, holding) -> None:
        response = _trade(client, "sell", holding, "ABC", 50)
        assert response.status_code == 400
        assert response.json() == {"error": NOT_ENOUGH_SHARES}
        assert len(client.get(f"/api/Trade/{holding}").json()) == 10

    def test_valid_sell_returns_created_trade(self, client, holding) -> None:
        response = _trade(client, "sell", holding, "ABC", 10)
        assert response.status_code == 201
        body = response.json()
        assert body["Action"] == "SELL"
        assert body["NoOfShares"] == 10
        assert Decimal(str(body["Price"])) == Decimal("900")

        portfolio = client.get(f"/api/Portfolio/{holding}").json()
        assert portfolio["Trades"][-1] == body
        assert portfolio["Holdings"] == {"ABC": 10}


class TestListTradesEndpoint:
    """Tests for GET /api/Trade/{portfolioId}."""

    def test_unknown_portfolio_yields_empty_list(self, client) -> None:
        response = client.get("/api/Trade/12345")
        assert response.status_code == 200
        assert response.json() == []

    def test_only_portfolio_trades_listed(self, client) -> None:
        first = _portfolio(client, "First")
        second = _portfolio(client, "Second")
        _quote(client, "ABC", 90)
        _trade(client, "buy", first, "ABC", 1)
        _trade(client, "buy", second, "ABC", 2)
        _trade(client, "buy", first, "ABC", 3)

        trades = client.get(f"/api/Trade/{first}").json()
        assert [t["NoOfShares"] for t in trades] == [1, 3]


class TestShareEndpoints:
    def test_latest_quote(self, client) -> None:
        _quote(client, "ABC", 80, "2024-01-01T10:00:00Z")
        _quote(client, "ABC", 95, "2024-01-02T10:00:00Z")

        body = client.get("/api/Share/ABC/latest").json()
        assert Decimal(str(body["Rate"])) == Decimal("95")

    def test_latest_unknown_share(self, client) -> None:
        response = client.get("/api/Share/ABC/latest")
        assert response.status_code == 400
        assert response.json() == {"error": SHARE_NOT_FOUND}

    def test_history(self, client) -> None:
        _quote(client, "ABC", 95, "2024-01-02T10:00:00Z")
        _quote(client, "ABC", 80, "2024-01-01T10:00:00Z")

        rates = [Decimal(str(q["Rate"])) for q in client.get("/api/Share/ABC").json()]
        assert rates == [Decimal("80"), Decimal("95")]
        assert client.get("/api/Share/XYZ").json() == []

    def test_registered_quote_matches_latest(self, client) -> None:
        response = client.post(
            "/api/Share",
            json={"Symbol": "ABC", "Rate": 90, "TimeStamp": "2024-01-01T11:00:00+01:00"},
        )
        assert response.status_code == 201
        assert response.json() == client.get("/api/Share/ABC/latest").json()

    def test_non_positive_rate_rejected(self, client) -> None:
        response = client.post("/api/Share", json={"Symbol": "ABC", "Rate": 0})
        assert response.status_code == 422


class TestPortfolioEndpoints:
    def test_create_and_get(self, client) -> None:
        portfolio_id = _portfolio(client, "Ahror")
        body = client.get(f"/api/Portfolio/{portfolio_id}").json()
        assert body == {"Id": portfolio_id, "Name": "Ahror", "Trades": [], "Holdings": {}}

    def test_unknown_portfolio(self, client) -> None:
        response = client.get("/api/Portfolio/77")
        assert response.status_code == 400
        assert response.json() == {"error": PORTFOLIO_NOT_FOUND}

    def test_empty_name_rejected(self, client) -> None:
        assert client.post("/api/Portfolio", json={"Name": ""}).status_code == 422


class TestStorageErrors:
    def test_storage_failure_is_internal_error(self, client) -> None:
        use_case = MagicMock()
        use_case.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        app.dependency_overrides[get_list_trades_use_case] = lambda: use_case

        response = client.get("/api/Trade/1")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_concurrent_update_is_conflict(self, client) -> None:
        use_case = MagicMock()
        use_case.execute.side_effect = ConcurrentPortfolioUpdateError(1)
        app.dependency_overrides[get_execute_buy_use_case] = lambda: use_case

        response = _trade(client, "buy", 1, "ABC", 10)
        assert response.status_code == 409
        assert response.json() == {
            "error": "Portfolio was modified concurrently",
            "detail": "Portfolio 1 was modified concurrently; retry the request.",
        }


class TestSecurityHeaders:
    """Tests for security headers on responses."""

    def test_security_headers_present(self, client) -> None:
        response = client.get("/api/health")
        for header_name, header_value in SECURE_HEADERS.items():
            assert response.headers[header_name] == header_value
        assert "Cache-Control" not in response.headers

    def test_account_data_not_cacheable(self, client) -> None:
        portfolio_id = _portfolio(client)
        assert client.get(f"/api/Portfolio/{portfolio_id}").headers["Cache-Control"] == "no-store"
        assert client.get(f"/api/Trade/{portfolio_id}").headers["Cache-Control"] == "no-store"


class TestRateLimiting:
    """Tests for rate limiting behavior."""

    def test_rate_limit_returns_429(self, client) -> None:
        limiter.reset()
        limiter.enabled = True
        try:
            statuses = [
                _trade(client, "buy", 1, "ABC", 1).status_code for _ in range(61)
            ]
        finally:
            limiter.enabled = False
            limiter.reset()

        assert statuses[0] == 400
        assert statuses[-1] == 429
