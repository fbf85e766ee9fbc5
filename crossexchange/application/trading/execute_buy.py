"""
Use case: Buy shares for a portfolio at the latest quote.

Input: ExecuteTradeCommand (portfolio_id, symbol, no_of_shares)
Output: TradeResult
Side effects: Appends a BUY trade to the portfolio and persists it.
Failure cases: PortfolioNotFoundError, ShareNotFoundError.
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
from crossexchange.domain.trading.pricing import price_trade

logger = logging.getLogger(__name__)


class ExecuteBuyUseCase:
    """Orchestrates a BUY trade.

    The portfolio is checked before the share quote; the trade is
    priced at the latest quote and appended to the portfolio.
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
        """Run the buy use case.

        Args:
            command: Portfolio, symbol and share count to buy.

        Returns:
            The created trade.

        Raises:
            PortfolioNotFoundError: If the portfolio does not exist.
            ShareNotFoundError: If no quote exists for the symbol.
        """
        logger.info(
            "Buying %d x %s for portfolio=%d",
            command.no_of_shares,
            command.symbol,
            command.portfolio_id,
        )

        with self._locks.hold(command.portfolio_id):
            portfolio = self._portfolio_repo.get_by_id(command.portfolio_id)
            if portfolio is None:
                raise PortfolioNotFoundError(command.portfolio_id)

            quote = self._quote_repo.latest(command.symbol)
            if quote is None:
                raise ShareNotFoundError(command.symbol)

            trade = price_trade(portfolio, quote, TradeAction.BUY, command.no_of_shares)
            portfolio.add_trade(trade)
            self._portfolio_repo.save(portfolio)

        logger.info(
            "Bought %d x %s at %s for portfolio=%d (total %s)",
            trade.no_of_shares,
            trade.symbol,
            quote.rate,
            trade.portfolio_id,
            trade.price,
        )
        return TradeResult.from_trade(trade)
