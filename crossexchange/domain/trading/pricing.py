"""
Domain rules: trade pricing and sell eligibility.

Pure functions with no IO. Callers fetch the quote and the
portfolio; these rules decide what the resulting trade is.
"""

from crossexchange.domain.trading.entities import (
    Portfolio,
    ShareQuote,
    Trade,
    TradeAction,
)
from crossexchange.domain.trading.errors import (
    InsufficientSharesError,
    NoSuchHoldingError,
)


def price_trade(
    portfolio: Portfolio,
    quote: ShareQuote,
    action: TradeAction,
    no_of_shares: int,
) -> Trade:
    """Build a trade for ``portfolio`` at the quote's rate.

    Args:
        portfolio: Portfolio the trade is booked against.
        quote: Latest quote of the traded symbol.
        action: BUY or SELL.
        no_of_shares: Positive share count.

    Returns:
        A Trade whose price is ``quote.rate * no_of_shares``.
    """
    return Trade(
        symbol=quote.symbol,
        action=action,
        no_of_shares=no_of_shares,
        price=quote.rate * no_of_shares,
        portfolio_id=portfolio.id,
    )


def ensure_can_sell(portfolio: Portfolio, symbol: str, no_of_shares: int) -> None:
    """Check that ``portfolio`` may sell ``no_of_shares`` of ``symbol``.

    Raises:
        NoSuchHoldingError: If the portfolio never traded the symbol.
        InsufficientSharesError: If fewer shares are available than requested.
    """
    if not portfolio.holds(symbol):
        raise NoSuchHoldingError(portfolio.id, symbol)

    available = portfolio.available_quantity(symbol)
    if available < no_of_shares:
        raise InsufficientSharesError(symbol, no_of_shares, available)
