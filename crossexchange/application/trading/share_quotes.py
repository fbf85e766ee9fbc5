"""
Use cases: Register and look up share price quotes.

RegisterQuoteUseCase
    Input: RegisterQuoteCommand (symbol, rate, optional timestamp)
    Output: QuoteResult
    Side effects: Persists a new quote.

GetLatestQuoteUseCase
    Input: GetQuoteQuery (symbol)
    Output: QuoteResult
    Failure cases: ShareNotFoundError.

GetQuoteHistoryUseCase
    Input: GetQuoteQuery (symbol)
    Output: list[QuoteResult], oldest first. Empty for unknown symbols.
"""

import logging
from datetime import datetime, timezone

from crossexchange.application.trading.dtos import (
    GetQuoteQuery,
    QuoteResult,
    RegisterQuoteCommand,
)
from crossexchange.domain.trading.entities import ShareQuote
from crossexchange.domain.trading.errors import ShareNotFoundError
from crossexchange.domain.trading.ports import ShareQuoteRepository

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class RegisterQuoteUseCase:
    """Stores a new quote for a symbol."""

    def __init__(self, quote_repo: ShareQuoteRepository) -> None:
        self._quote_repo = quote_repo

    def execute(self, command: RegisterQuoteCommand) -> QuoteResult:
        """Run the register quote use case.

        Args:
            command: Symbol, rate and optional timestamp of the quote.

        Returns:
            The stored quote.
        """
        timestamp = _as_utc(command.timestamp or datetime.now(timezone.utc))
        quote = ShareQuote(symbol=command.symbol, rate=command.rate, timestamp=timestamp)
        stored = self._quote_repo.save(quote)

        logger.info(
            "Registered quote %s @ %s (%s)",
            stored.symbol,
            stored.rate,
            stored.timestamp.isoformat(),
        )
        return QuoteResult.from_quote(stored)


class GetLatestQuoteUseCase:
    """Returns the current price of a symbol."""

    def __init__(self, quote_repo: ShareQuoteRepository) -> None:
        self._quote_repo = quote_repo

    def execute(self, query: GetQuoteQuery) -> QuoteResult:
        """Run the latest quote use case.

        Raises:
            ShareNotFoundError: If no quote exists for the symbol.
        """
        quote = self._quote_repo.latest(query.symbol)
        if quote is None:
            raise ShareNotFoundError(query.symbol)
        return QuoteResult.from_quote(quote)


class GetQuoteHistoryUseCase:
    def __init__(self, quote_repo: ShareQuoteRepository) -> None:
        self._quote_repo = quote_repo

    def execute(self, query: GetQuoteQuery) -> list[QuoteResult]:
        return [QuoteResult.from_quote(q) for q in self._quote_repo.history(query.symbol)]
