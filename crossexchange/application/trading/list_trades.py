"""
Use case: List the trades of a portfolio.

Input: ListTradesQuery (portfolio_id)
Output: list[TradeResult]
Side effects: None (read-only query).
Failure cases: None. An unknown portfolio yields an empty list.
"""

import logging

from crossexchange.application.trading.dtos import ListTradesQuery, TradeResult
from crossexchange.domain.trading.ports import TradeLedgerRepository

logger = logging.getLogger(__name__)


class ListTradesUseCase:
    """Reads a portfolio's trades from the ledger in insertion order."""

    def __init__(self, ledger_repo: TradeLedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def execute(self, query: ListTradesQuery) -> list[TradeResult]:
        logger.debug("Listing trades for portfolio=%d", query.portfolio_id)
        trades = self._ledger_repo.by_portfolio(query.portfolio_id)
        return [TradeResult.from_trade(trade) for trade in trades]
