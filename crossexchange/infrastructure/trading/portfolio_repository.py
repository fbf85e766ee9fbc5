"""
Adapter: Portfolio persistence.

Implements PortfolioRepository port.
A portfolio is stored as a row in ``portfolios`` plus its rows in
``trades``. Saving appends the trades added since the aggregate was
loaded, guarded by the aggregate's version (persisted trade count).
"""

import logging
from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Engine

from crossexchange.domain.trading.entities import Portfolio
from crossexchange.domain.trading.errors import (
    ConcurrentPortfolioUpdateError,
    PortfolioNotFoundError,
)
from crossexchange.domain.trading.ports import PortfolioRepository
from crossexchange.infrastructure.trading.database import (
    portfolios,
    trade_from_row,
    trades,
)

logger = logging.getLogger(__name__)


class PortfolioRepositoryAdapter(PortfolioRepository):
    """SQL implementation of the portfolio store.

    Implements the PortfolioRepository port defined in the domain layer.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, portfolio_id: int) -> Optional[Portfolio]:
        """Return a portfolio by its ID, or None if not found.

        Args:
            portfolio_id: Id of the portfolio to retrieve.

        Returns:
            Portfolio entity with its trades in insertion order, or None.
        """
        with self._engine.connect() as conn:
            row = conn.execute(
                select(portfolios).where(portfolios.c.id == portfolio_id)
            ).first()
            if row is None:
                return None

            trade_rows = conn.execute(
                select(trades)
                .where(trades.c.portfolio_id == portfolio_id)
                .order_by(trades.c.id.asc())
            ).all()

        portfolio_trades = [trade_from_row(r) for r in trade_rows]
        return Portfolio(
            id=row.id,
            name=row.name,
            trades=portfolio_trades,
            version=len(portfolio_trades),
        )

    def add(self, name: str) -> Portfolio:
        """Register a new empty portfolio.

        Args:
            name: Display name of the portfolio.

        Returns:
            The stored Portfolio with its generated id.
        """
        with self._engine.begin() as conn:
            result = conn.execute(insert(portfolios).values(name=name))
            portfolio_id = result.inserted_primary_key[0]

        return Portfolio(id=portfolio_id, name=name)

    def save(self, portfolio: Portfolio) -> None:
        """Persist a portfolio and the trades appended since it was loaded.

        Runs in a single transaction. The portfolio row is locked where
        the database supports it, then the stored trade count is compared
        with ``portfolio.version``.

        Args:
            portfolio: Portfolio entity to save.

        Raises:
            PortfolioNotFoundError: If the portfolio row no longer exists.
            ConcurrentPortfolioUpdateError: If trades were stored by
                another writer after the portfolio was loaded.
        """
        new_trades = portfolio.trades[portfolio.version:]

        with self._engine.begin() as conn:
            locked = conn.execute(
                select(portfolios.c.id)
                .where(portfolios.c.id == portfolio.id)
                .with_for_update()
            ).first()
            if locked is None:
                raise PortfolioNotFoundError(portfolio.id)

            stored = conn.execute(
                select(func.count())
                .select_from(trades)
                .where(trades.c.portfolio_id == portfolio.id)
            ).scalar_one()
            if stored != portfolio.version:
                logger.warning(
                    "Portfolio %d has %d stored trades, expected %d.",
                    portfolio.id,
                    stored,
                    portfolio.version,
                )
                raise ConcurrentPortfolioUpdateError(portfolio.id)

            conn.execute(
                update(portfolios)
                .where(portfolios.c.id == portfolio.id)
                .values(name=portfolio.name)
            )
            if new_trades:
                conn.execute(
                    insert(trades),
                    [
                        {
                            "portfolio_id": portfolio.id,
                            "symbol": t.symbol,
                            "action": t.action.value,
                            "no_of_shares": t.no_of_shares,
                            "price": t.price,
                        }
                        for t in new_trades
                    ],
                )

        portfolio.version = len(portfolio.trades)
        logger.debug(
            "Saved portfolio id=%d (%d new trades).", portfolio.id, len(new_trades)
        )
