"""
Use case: Sell shares held by a portfolio at the latest quote.

Input: ExecuteTradeCommand (portfolio_id, symbol, no_of_shares)
Output: TradeResult
Side effects: Appends a SELL trade to the portfolio and persists it.
Failure cases: ShareNotFoundError, PortfolioNotFoundError,
    NoSuchHoldingError, InsufficientSharesError.
"""

import logging

from crossexchange.application.trading.dtos import ExecuteTradeCommand, TradeResult
from crossexchange.application.trading.locks import PortfolioLocks
from crossexchange.domain.trading.entities import TradeAction
from crossexchange.domain.trading.errors import (
    PortfolioNotFoundError,
    ShareNotFoundError,
)
from crossexchange.domain.trading.ports import PortfolioRepository, ShareQuoteRepository
from crossexchange.domain.trading.pricing import ensure_can_sell, price_trade

logger = logging.getLogger(__name__)


class ExecuteSellUseCase:
    """Orchestrates a SELL trade.

    Unlike a buy, the share quote is checked before the portfolio.
    The portfolio must have traded the symbol and still hold at least
    the requested quantity.
    """

    def __init__(
        self,
        portfolio_repo: PortfolioRepository,
        quote_repo: ShareQuoteRepository,
        locks: PortfolioLocks,
    ) -> None:
        self._portfolio_repo = portfolio_repo
        self._quote_repo = quote_repo
        self._locks = locks

    def execute(self, command: ExecuteTradeCommand) -> TradeResult:
        """Run the sell use case.

        Args:
            command: Portfolio, symbol and share count to sell.

        Returns:
            The created trade.

        Raises:
            ShareNotFoundError: If no quote exists for the symbol.
            PortfolioNotFoundError: If the portfolio does not exist.
            NoSuchHoldingError: If the portfolio never traded the symbol.
            InsufficientSharesError: If not enough shares are available.
        """
        logger.info(
            "Selling %d x %s for portfolio=%d",
            command.no_of_shares,
            command.symbol,
            command.portfolio_id,
        )

        with self._locks.hold(command.portfolio_id):
            quote = self._quote_repo.latest(command.symbol)
            if quote is None:
                raise ShareNotFoundError(command.symbol)

            portfolio = self._portfolio_repo.get_by_id(command.portfolio_id)
            if portfolio is None:
                raise PortfolioNotFoundError(command.portfolio_id)

            ensure_can_sell(portfolio, command.symbol, command.no_of_shares)

            trade = price_trade(portfolio, quote, TradeAction.SELL, command.no_of_shares)
            portfolio.add_trade(trade)
            self._portfolio_repo.save(portfolio)

        logger.info(
            "Sold %d x %s at %s for portfolio=%d (total %s)",
            trade.no_of_shares,
            trade.symbol,
            quote.rate,
            trade.portfolio_id,
            trade.price,
        )
        return TradeResult.from_trade(trade)
