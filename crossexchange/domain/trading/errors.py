"""
Domain-specific errors for the trading bounded context.

All errors raised from the domain and application layers are defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.

The messages of the four trade validation errors are part of the
public API and are returned to clients verbatim.
"""


class TradingDomainError(Exception):
    """Base error for all trading domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class PortfolioNotFoundError(TradingDomainError):
    """Raised when a portfolio id is not registered."""

    def __init__(self, portfolio_id: int) -> None:
        super().__init__("There is no such kind of registered portfolio.")
        self.portfolio_id = portfolio_id


class ShareNotFoundError(TradingDomainError):
    """Raised when no quote exists for a share symbol."""

    def __init__(self, symbol: str) -> None:
        super().__init__("There is no such kind of registered share.")
        self.symbol = symbol


class NoSuchHoldingError(TradingDomainError):
    """Raised when selling a symbol the portfolio never traded."""

    def __init__(self, portfolio_id: int, symbol: str) -> None:
        super().__init__("You do not have this kind of share to sell.")
        self.portfolio_id = portfolio_id
        self.symbol = symbol


class InsufficientSharesError(TradingDomainError):
    """Raised when a sell exceeds the available quantity of a symbol."""

    def __init__(self, symbol: str, requested: int, available: int) -> None:
        super().__init__("There are not enough share to sell.")
        self.symbol = symbol
        self.requested = requested
        self.available = available


class ConcurrentPortfolioUpdateError(TradingDomainError):
    """Raised when a portfolio changed in storage after it was loaded."""

    def __init__(self, portfolio_id: int) -> None:
        super().__init__(
            f"Portfolio {portfolio_id} was modified concurrently; retry the request."
        )
        self.portfolio_id = portfolio_id
