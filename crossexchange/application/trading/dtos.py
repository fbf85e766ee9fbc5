"""
Data Transfer Objects for the trading application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from crossexchange.domain.trading.entities import ShareQuote, Trade


@dataclass(frozen=True)
class ExecuteTradeCommand:
    """Input DTO for a BUY or SELL request.

    Attributes:
        portfolio_id: Portfolio the trade is booked against.
        symbol: Share symbol to trade.
        no_of_shares: Number of shares (positive).
    """

    portfolio_id: int
    symbol: str
    no_of_shares: int


@dataclass(frozen=True)
class TradeResult:
    """Output DTO for an executed trade.

    Attributes:
        symbol: Share symbol traded.
        action: "BUY" or "SELL".
        no_of_shares: Number of shares traded.
        price: Total cost or proceeds.
        portfolio_id: Owning portfolio.
    """

    symbol: str
    action: str
    no_of_shares: int
    price: Decimal
    portfolio_id: int

    @classmethod
    def from_trade(cls, trade: Trade) -> "TradeResult":
        return cls(
            symbol=trade.symbol,
            action=trade.action.value,
            no_of_shares=trade.no_of_shares,
            price=trade.price,
            portfolio_id=trade.portfolio_id,
        )


@dataclass(frozen=True)
class ListTradesQuery:
    """Input DTO for listing the trades of a portfolio."""

    portfolio_id: int


@dataclass(frozen=True)
class RegisterQuoteCommand:
    """Input DTO for registering a share price quote.

    Attributes:
        symbol: Share symbol.
        rate: Price of one share.
        timestamp: Quote time. Defaults to now (UTC) when omitted.
    """

    symbol: str
    rate: Decimal
    timestamp: datetime | None = None


@dataclass(frozen=True)
class GetQuoteQuery:
    """Input DTO for quote lookups by symbol."""

    symbol: str


@dataclass(frozen=True)
class QuoteResult:
    """Output DTO for a share price quote."""

    symbol: str
    rate: Decimal
    timestamp: datetime

    @classmethod
    def from_quote(cls, quote: ShareQuote) -> "QuoteResult":
        return cls(symbol=quote.symbol, rate=quote.rate, timestamp=quote.timestamp)


@dataclass(frozen=True)
class CreatePortfolioCommand:
    """Input DTO for registering a portfolio."""

    name: str


@dataclass(frozen=True)
class GetPortfolioQuery:
    """Input DTO for retrieving a portfolio."""

    portfolio_id: int


@dataclass(frozen=True)
class PortfolioResult:
    """Output DTO for a portfolio.

    Attributes:
        id: Store-assigned portfolio id.
        name: Display name.
        trades: Executed trades in insertion order.
        holdings: Available quantity per traded symbol.
    """

    id: int
    name: str
    trades: list[TradeResult] = field(default_factory=list)
    holdings: dict[str, int] = field(default_factory=dict)
