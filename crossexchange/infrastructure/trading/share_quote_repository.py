"""
Adapter: Share quote repository.

Implements ShareQuoteRepository port.
Stores and reads the quote time series in the share_quotes table.
"""

import logging
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from crossexchange.domain.trading.entities import ShareQuote
from crossexchange.domain.trading.ports import ShareQuoteRepository
from crossexchange.infrastructure.trading.database import (
    from_storage_timestamp,
    share_quotes,
    to_storage_timestamp,
)

logger = logging.getLogger(__name__)


def _to_entity(row: Any) -> ShareQuote:
    return ShareQuote(
        symbol=row.symbol,
        rate=Decimal(str(row.rate)),
        timestamp=from_storage_timestamp(row.timestamp),
    )


class ShareQuoteRepositoryAdapter(ShareQuoteRepository):
    """SQL implementation of the share quote store.

    Implements the ShareQuoteRepository port defined in the domain layer.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def latest(self, symbol: str) -> Optional[ShareQuote]:
        """Return the quote with the greatest timestamp for a symbol.

        Quotes sharing the greatest timestamp are not ordered further;
        any one of them may be returned.

        Args:
            symbol: Share symbol.

        Returns:
            The latest ShareQuote, or None if the symbol has no quotes.
        """
        query = (
            select(share_quotes)
            .where(share_quotes.c.symbol == symbol)
            .order_by(share_quotes.c.timestamp.desc())
            .limit(1)
        )
        with self._engine.connect() as conn:
            row = conn.execute(query).first()

        return _to_entity(row) if row is not None else None

    def history(self, symbol: str) -> list[ShareQuote]:
        """Return all quotes for a symbol, oldest first."""
        query = (
            select(share_quotes)
            .where(share_quotes.c.symbol == symbol)
            .order_by(share_quotes.c.timestamp.asc(), share_quotes.c.id.asc())
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query).all()

        return [_to_entity(row) for row in rows]

    def save(self, quote: ShareQuote) -> ShareQuote:
        """Persist a single quote.

        Args:
            quote: The quote to store.

        Returns:
            The quote read back from the table, with the rate at column
            scale and the timestamp in UTC.
        """
        with self._engine.begin() as conn:
            result = conn.execute(
                insert(share_quotes).values(
                    symbol=quote.symbol,
                    rate=quote.rate,
                    timestamp=to_storage_timestamp(quote.timestamp),
                )
            )
            row = conn.execute(
                select(share_quotes).where(
                    share_quotes.c.id == result.inserted_primary_key[0]
                )
            ).one()

        logger.debug("Saved quote for symbol=%s.", quote.symbol)
        return _to_entity(row)
