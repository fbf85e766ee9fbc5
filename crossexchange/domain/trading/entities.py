"""
Domain entities for the trading bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TradeAction(Enum):
    """Direction of an executed trade."""

    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class ShareQuote:
    """A timestamped price for one share of a symbol.

    Several quotes exist per symbol; the one with the latest
    timestamp is the current price.
    """

    symbol: str
    rate: Decimal
    timestamp: datetime


@dataclass(frozen=True)
class Trade:
    """An executed BUY or SELL transaction.

    Attributes:
        symbol: Share symbol traded.
        action: BUY or SELL.
        no_of_shares: Number of shares, always positive.
        price: Total cost or proceeds (rate x no_of_shares).
        portfolio_id: Owning portfolio.
    """

    symbol: str
    action: TradeAction
    no_of_shares: int
    price: Decimal
    portfolio_id: int


@dataclass
class Portfolio:
    """An investor's account aggregate holding an append-only trade list.

    ``version`` is the number of trades already persisted when the
    aggregate was loaded. Stores use it to detect concurrent writers.
    """

    id: int
    name: str
    trades: list[Trade] = field(default_factory=list)
    version: int = 0

    def holds(self, symbol: str) -> bool:
        """Return True if any trade of this portfolio concerns ``symbol``."""
        return any(trade.symbol == symbol for trade in self.trades)

    def available_quantity(self, symbol: str) -> int:
        """Return shares bought minus shares sold for ``symbol``."""
        bought = sum(
            t.no_of_shares
            for t in self.trades
            if t.symbol == symbol and t.action is TradeAction.BUY
        )
        sold = sum(
            t.no_of_shares
            for t in self.trades
            if t.symbol == symbol and t.action is TradeAction.SELL
        )
        return bought - sold

    def holdings(self) -> dict[str, int]:
        """Return the available quantity of every symbol traded, in first-trade order."""
        symbols = dict.fromkeys(t.symbol for t in self.trades)
        return {symbol: self.available_quantity(symbol) for symbol in symbols}

    def add_trade(self, trade: Trade) -> None:
        """Append a trade executed for this portfolio."""
        self.trades.append(trade)
