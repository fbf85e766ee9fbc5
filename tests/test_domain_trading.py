"""
Tests for the trading domain layer.

Tests domain entities, pricing rules and error classes in isolation.
No external dependencies or IO required.
"""

import dataclasses
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from crossexchange.domain.trading.entities import (
    Portfolio,
    ShareQuote,
    Trade,
    TradeAction,
)
from crossexchange.domain.trading.errors import (
    ConcurrentPortfolioUpdateError,
    InsufficientSharesError,
    NoSuchHoldingError,
    PortfolioNotFoundError,
    ShareNotFoundError,
    TradingDomainError,
)
from crossexchange.domain.trading.pricing import ensure_can_sell, price_trade


def _trade(
    action: TradeAction,
    no_of_shares: int,
    symbol: str = "ABC",
    portfolio_id: int = 1,
) -> Trade:
    return Trade(
        symbol=symbol,
        action=action,
        no_of_shares=no_of_shares,
        price=Decimal("90") * no_of_shares,
        portfolio_id=portfolio_id,
    )


def _quote(symbol: str = "ABC", rate: str = "90") -> ShareQuote:
    return ShareQuote(
        symbol=symbol,
        rate=Decimal(rate),
        timestamp=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
    )


class TestTradeAction:
    """Tests for the closed BUY/SELL enumeration."""

    def test_values(self) -> None:
        assert TradeAction("BUY") is TradeAction.BUY
        assert TradeAction("SELL") is TradeAction.SELL

    def test_unknown_action_rejected(self) -> None:
        with pytest.raises(ValueError):
            TradeAction("HOLD")


class TestTradeEntity:
    def test_trade_is_immutable(self) -> None:
        trade = _trade(TradeAction.BUY, 5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            trade.no_of_shares = 10  # type: ignore[misc]

    def test_quote_is_immutable(self) -> None:
        quote = _quote()
        with pytest.raises(dataclasses.FrozenInstanceError):
            quote.rate = Decimal("1")  # type: ignore[misc]


class TestPortfolioHoldings:
    """Tests for the available-quantity rules of a portfolio."""

    def test_empty_portfolio_holds_nothing(self) -> None:
        portfolio = Portfolio(id=1, name="Ahror")
        assert not portfolio.holds("ABC")
        assert portfolio.available_quantity("ABC") == 0
        assert portfolio.holdings() == {}

    def test_available_is_buys_minus_sells(self) -> None:
        portfolio = Portfolio(
            id=1,
            name="Ahror",
            trades=[
                _trade(TradeAction.BUY, 10),
                _trade(TradeAction.BUY, 5),
                _trade(TradeAction.SELL, 7),
            ],
        )
        assert portfolio.available_quantity("ABC") == 8

    def test_available_is_per_symbol(self) -> None:
        portfolio = Portfolio(
            id=1,
            name="Ahror",
            trades=[
                _trade(TradeAction.BUY, 10, symbol="ABC"),
                _trade(TradeAction.BUY, 3, symbol="XYZ"),
                _trade(TradeAction.SELL, 2, symbol="XYZ"),
            ],
        )
        assert portfolio.available_quantity("ABC") == 10
        assert portfolio.available_quantity("XYZ") == 1
        assert portfolio.holdings() == {"ABC": 10, "XYZ": 1}

    def test_fully_sold_symbol_is_still_held(self) -> None:
        portfolio = Portfolio(
            id=1,
            name="Ahror",
            trades=[_trade(TradeAction.BUY, 4), _trade(TradeAction.SELL, 4)],
        )
        assert portfolio.holds("ABC")
        assert portfolio.available_quantity("ABC") == 0

    def test_add_trade_appends(self) -> None:
        portfolio = Portfolio(id=1, name="Ahror", trades=[_trade(TradeAction.BUY, 1)])
        sell = _trade(TradeAction.SELL, 1)
        portfolio.add_trade(sell)
        assert portfolio.trades[-1] is sell
        assert len(portfolio.trades) == 2


class TestPricing:
    def test_price_is_rate_times_quantity(self) -> None:
        portfolio = Portfolio(id=7, name="Ahror")
        trade = price_trade(portfolio, _quote(rate="90"), TradeAction.BUY, 10)
        assert trade == Trade(
            symbol="ABC",
            action=TradeAction.BUY,
            no_of_shares=10,
            price=Decimal("900"),
            portfolio_id=7,
        )

    def test_fractional_rate(self) -> None:
        portfolio = Portfolio(id=1, name="Ahror")
        trade = price_trade(portfolio, _quote(rate="12.345"), TradeAction.SELL, 3)
        assert trade.price == Decimal("37.035")
        assert trade.action is TradeAction.SELL

    def test_sell_without_holding_rejected(self) -> None:
        portfolio = Portfolio(id=1, name="Ahror", trades=[_trade(TradeAction.BUY, 5)])
        with pytest.raises(NoSuchHoldingError):
            ensure_can_sell(portfolio, "XYZ", 1)

    def test_sell_more_than_available_rejected(self) -> None:
        portfolio = Portfolio(
            id=1, name="Ahror", trades=[_trade(TradeAction.BUY, 2) for _ in range(10)]
        )
        with pytest.raises(InsufficientSharesError) as exc_info:
            ensure_can_sell(portfolio, "ABC", 50)
        assert exc_info.value.requested == 50
        assert exc_info.value.available == 20

    def test_sell_exactly_available_allowed(self) -> None:
        portfolio = Portfolio(id=1, name="Ahror", trades=[_trade(TradeAction.BUY, 20)])
        ensure_can_sell(portfolio, "ABC", 20)


class TestDomainErrors:
    """Tests for domain error classes and their client-facing messages."""

    def test_portfolio_not_found_message(self) -> None:
        err = PortfolioNotFoundError(3)
        assert err.message == "There is no such kind of registered portfolio."
        assert err.portfolio_id == 3

    def test_share_not_found_message(self) -> None:
        err = ShareNotFoundError("CBA")
        assert err.message == "There is no such kind of registered share."
        assert err.symbol == "CBA"

    def test_no_such_holding_message(self) -> None:
        err = NoSuchHoldingError(1, "XYZ")
        assert err.message == "You do not have this kind of share to sell."

    def test_insufficient_shares_message(self) -> None:
        err = InsufficientSharesError("ABC", 50, 20)
        assert err.message == "There are not enough share to sell."

    def test_all_derive_from_base(self) -> None:
        for err in (
            PortfolioNotFoundError(1),
            ShareNotFoundError("ABC"),
            NoSuchHoldingError(1, "ABC"),
            InsufficientSharesError("ABC", 1, 0),
            ConcurrentPortfolioUpdateError(1),
        ):
            assert isinstance(err, TradingDomainError)
            assert str(err) == err.message
