"""
Dependency injection for the trading bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the trading context.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.engine import Engine

from crossexchange.application.trading.execute_buy import ExecuteBuyUseCase
from crossexchange.application.trading.execute_sell import ExecuteSellUseCase
from crossexchange.application.trading.list_trades import ListTradesUseCase
from crossexchange.application.trading.locks import PortfolioLocks
from crossexchange.application.trading.portfolios import (
    CreatePortfolioUseCase,
    GetPortfolioUseCase,
)
from crossexchange.application.trading.share_quotes import (
    GetLatestQuoteUseCase,
    GetQuoteHistoryUseCase,
    RegisterQuoteUseCase,
)
from crossexchange.core.config import settings
from crossexchange.infrastructure.trading.database import build_engine
from crossexchange.infrastructure.trading.portfolio_repository import (
    PortfolioRepositoryAdapter,
)
from crossexchange.infrastructure.trading.share_quote_repository import (
    ShareQuoteRepositoryAdapter,
)
from crossexchange.infrastructure.trading.trade_ledger_repository import (
    TradeLedgerRepositoryAdapter,
)

_portfolio_locks = PortfolioLocks()


@lru_cache
def get_engine() -> Engine:
    """Build the process-wide SQLAlchemy engine from application settings."""
    return build_engine(settings.database_url)


def get_portfolio_locks() -> PortfolioLocks:
    """Return the process-wide per-portfolio lock registry."""
    return _portfolio_locks


def get_execute_buy_use_case(
    engine: Engine = Depends(get_engine),
    locks: PortfolioLocks = Depends(get_portfolio_locks),
) -> ExecuteBuyUseCase:
    """Build ExecuteBuyUseCase with its infrastructure dependencies."""
    return ExecuteBuyUseCase(
        portfolio_repo=PortfolioRepositoryAdapter(engine=engine),
        quote_repo=ShareQuoteRepositoryAdapter(engine=engine),
        locks=locks,
    )


def get_execute_sell_use_case(
    engine: Engine = Depends(get_engine),
    locks: PortfolioLocks = Depends(get_portfolio_locks),
) -> ExecuteSellUseCase:
    """Build ExecuteSellUseCase with its infrastructure dependencies."""
    return ExecuteSellUseCase(
        portfolio_repo=PortfolioRepositoryAdapter(engine=engine),
        quote_repo=ShareQuoteRepositoryAdapter(engine=engine),
        locks=locks,
    )


def get_list_trades_use_case(engine: Engine = Depends(get_engine)) -> ListTradesUseCase:
    """Build ListTradesUseCase with its infrastructure dependencies."""
    return ListTradesUseCase(ledger_repo=TradeLedgerRepositoryAdapter(engine=engine))


def get_register_quote_use_case(
    engine: Engine = Depends(get_engine),
) -> RegisterQuoteUseCase:
    return RegisterQuoteUseCase(quote_repo=ShareQuoteRepositoryAdapter(engine=engine))


def get_latest_quote_use_case(
    engine: Engine = Depends(get_engine),
) -> GetLatestQuoteUseCase:
    return GetLatestQuoteUseCase(quote_repo=ShareQuoteRepositoryAdapter(engine=engine))


def get_quote_history_use_case(
    engine: Engine = Depends(get_engine),
) -> GetQuoteHistoryUseCase:
    return GetQuoteHistoryUseCase(quote_repo=ShareQuoteRepositoryAdapter(engine=engine))


def get_create_portfolio_use_case(
    engine: Engine = Depends(get_engine),
) -> CreatePortfolioUseCase:
    return CreatePortfolioUseCase(portfolio_repo=PortfolioRepositoryAdapter(engine=engine))


def get_portfolio_use_case(engine: Engine = Depends(get_engine)) -> GetPortfolioUseCase:
    return GetPortfolioUseCase(portfolio_repo=PortfolioRepositoryAdapter(engine=engine))
