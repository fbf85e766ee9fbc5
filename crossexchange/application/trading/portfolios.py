"""
Use cases: Register and retrieve portfolios.

CreatePortfolioUseCase
    Input: CreatePortfolioCommand (name)
    Output: PortfolioResult (empty trades)
    Side effects: Persists a new portfolio.

GetPortfolioUseCase
    Input: GetPortfolioQuery (portfolio_id)
    Output: PortfolioResult with trades and holdings
    Failure cases: PortfolioNotFoundError.
"""

import logging

from crossexchange.application.trading.dtos import (
    CreatePortfolioCommand,
    GetPortfolioQuery,
    PortfolioResult,
    TradeResult,
)
from crossexchange.domain.trading.entities import Portfolio
from crossexchange.domain.trading.errors import PortfolioNotFoundError
from crossexchange.domain.trading.ports import PortfolioRepository

logger = logging.getLogger(__name__)


def _to_result(portfolio: Portfolio) -> PortfolioResult:
    return PortfolioResult(
        id=portfolio.id,
        name=portfolio.name,
        trades=[TradeResult.from_trade(t) for t in portfolio.trades],
        holdings=portfolio.holdings(),
    )


class CreatePortfolioUseCase:
    """Registers a new, empty portfolio."""

    def __init__(self, portfolio_repo: PortfolioRepository) -> None:
        self._portfolio_repo = portfolio_repo

    def execute(self, command: CreatePortfolioCommand) -> PortfolioResult:
        portfolio = self._portfolio_repo.add(command.name)
        logger.info("Registered portfolio id=%d", portfolio.id)
        return _to_result(portfolio)


class GetPortfolioUseCase:
    """Loads a portfolio with its trade history and current holdings."""

    def __init__(self, portfolio_repo: PortfolioRepository) -> None:
        self._portfolio_repo = portfolio_repo

    def execute(self, query: GetPortfolioQuery) -> PortfolioResult:
        """Run the get portfolio use case.

        Raises:
            PortfolioNotFoundError: If the portfolio does not exist.
        """
        portfolio = self._portfolio_repo.get_by_id(query.portfolio_id)
        if portfolio is None:
            raise PortfolioNotFoundError(query.portfolio_id)
        return _to_result(portfolio)
