"""
Port interfaces (ABCs) for the trading bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from crossexchange.domain.trading.entities import Portfolio, ShareQuote, Trade


class ShareQuoteRepository(ABC):
    """Port for the time series of share price quotes."""

    @abstractmethod
    def latest(self, symbol: str) -> Optional[ShareQuote]:
        """Return the quote with the latest timestamp, or None if unknown."""
        raise NotImplementedError

    @abstractmethod
    def history(self, symbol: str) -> list[ShareQuote]:
        """Return all quotes of a symbol ordered by timestamp ascending."""
        raise NotImplementedError

    @abstractmethod
    def save(self, quote: ShareQuote) -> ShareQuote:
        """Persist a new quote and return it as stored."""
        raise NotImplementedError


class PortfolioRepository(ABC):
    """Port for persisting and retrieving portfolio aggregates."""

    @abstractmethod
    def get_by_id(self, portfolio_id: int) -> Optional[Portfolio]:
        """Return a portfolio with its trades, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def add(self, name: str) -> Portfolio:
        """Register a new empty portfolio and return it with its id."""
        raise NotImplementedError

    @abstractmethod
    def save(self, portfolio: Portfolio) -> None:
        """Persist trades appended to the portfolio since it was loaded.

        Raises:
            ConcurrentPortfolioUpdateError: If another writer appended
                trades after ``portfolio`` was loaded.
        """
        raise NotImplementedError


class TradeLedgerRepository(ABC):
    """Port for read queries over all executed trades."""

    @abstractmethod
    def by_portfolio(self, portfolio_id: int) -> list[Trade]:
        """Return trades of a portfolio in insertion order."""
        raise NotImplementedError
