"""
FastAPI routers for the trading bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, Request, status

from crossexchange.application.trading.dtos import (
    CreatePortfolioCommand,
    ExecuteTradeCommand,
    GetPortfolioQuery,
    GetQuoteQuery,
    ListTradesQuery,
    PortfolioResult,
    QuoteResult,
    RegisterQuoteCommand,
    TradeResult,
)
from crossexchange.application.trading.execute_buy import ExecuteBuyUseCase
from crossexchange.application.trading.execute_sell import ExecuteSellUseCase
from crossexchange.application.trading.list_trades import ListTradesUseCase
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
from crossexchange.interfaces.trading.dependencies import (
    get_create_portfolio_use_case,
    get_execute_buy_use_case,
    get_execute_sell_use_case,
    get_latest_quote_use_case,
    get_list_trades_use_case,
    get_portfolio_use_case,
    get_quote_history_use_case,
    get_register_quote_use_case,
)
from crossexchange.interfaces.trading.schemas import (
    CreatePortfolioRequest,
    ErrorResponse,
    PortfolioResponse,
    QuoteItem,
    RegisterQuoteRequest,
    TradeItem,
    TradeRequest,
)
from crossexchange.shared.security.rate_limiting import limiter

trade_router = APIRouter(prefix="/Trade", tags=["trade"])
share_router = APIRouter(prefix="/Share", tags=["share"])
portfolio_router = APIRouter(prefix="/Portfolio", tags=["portfolio"])


def _trade_item(result: TradeResult) -> TradeItem:
    return TradeItem(
        symbol=result.symbol,
        action=result.action,
        no_of_shares=result.no_of_shares,
        price=result.price,
        portfolio_id=result.portfolio_id,
    )


def _quote_item(result: QuoteResult) -> QuoteItem:
    return QuoteItem(symbol=result.symbol, rate=result.rate, time_stamp=result.timestamp)


def _portfolio_response(result: PortfolioResult) -> PortfolioResponse:
    return PortfolioResponse(
        id=result.id,
        name=result.name,
        trades=[_trade_item(t) for t in result.trades],
        holdings=result.holdings,
    )


# ── Trades ───────────────────────────────────────────────────────


@trade_router.get(
    "/{portfolio_id}",
    response_model=list[TradeItem],
    summary="List portfolio trades",
    description="Return every trade of a portfolio. Unknown portfolios yield an empty list.",
)
def list_trades(
    portfolio_id: int,
    use_case: ListTradesUseCase = Depends(get_list_trades_use_case),
) -> list[TradeItem]:
    """List trades for a portfolio in execution order."""
    results = use_case.execute(ListTradesQuery(portfolio_id=portfolio_id))
    return [_trade_item(r) for r in results]


@trade_router.post(
    "/buy",
    response_model=TradeItem,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    summary="Buy shares",
    description="Buy shares for a registered portfolio at the latest registered rate.",
)
@limiter.limit(settings.rate_limit_trades)
def buy(
    request: Request,
    trade: TradeRequest,
    use_case: ExecuteBuyUseCase = Depends(get_execute_buy_use_case),
) -> TradeItem:
    """Execute a BUY trade."""
    command = ExecuteTradeCommand(
        portfolio_id=trade.portfolio_id,
        symbol=trade.symbol,
        no_of_shares=trade.no_of_shares,
    )
    return _trade_item(use_case.execute(command))


@trade_router.post(
    "/sell",
    response_model=TradeItem,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    summary="Sell shares",
    description="Sell shares held by a portfolio at the latest registered rate.",
)
@limiter.limit(settings.rate_limit_trades)
def sell(
    request: Request,
    trade: TradeRequest,
    use_case: ExecuteSellUseCase = Depends(get_execute_sell_use_case),
) -> TradeItem:
    """Execute a SELL trade."""
    command = ExecuteTradeCommand(
        portfolio_id=trade.portfolio_id,
        symbol=trade.symbol,
        no_of_shares=trade.no_of_shares,
    )
    return _trade_item(use_case.execute(command))


# ── Shares ───────────────────────────────────────────────────────


@share_router.get(
    "/{symbol}",
    response_model=list[QuoteItem],
    summary="Quote history",
    description="Return all registered quotes of a symbol, oldest first.",
)
def get_quote_history(
    symbol: str,
    use_case: GetQuoteHistoryUseCase = Depends(get_quote_history_use_case),
) -> list[QuoteItem]:
    return [_quote_item(r) for r in use_case.execute(GetQuoteQuery(symbol=symbol))]


@share_router.get(
    "/{symbol}/latest",
    response_model=QuoteItem,
    responses={400: {"model": ErrorResponse}},
    summary="Latest quote",
    description="Return the quote with the latest timestamp for a symbol.",
)
def get_latest_quote(
    symbol: str,
    use_case: GetLatestQuoteUseCase = Depends(get_latest_quote_use_case),
) -> QuoteItem:
    return _quote_item(use_case.execute(GetQuoteQuery(symbol=symbol)))


@share_router.post(
    "",
    response_model=QuoteItem,
    status_code=status.HTTP_201_CREATED,
    summary="Register quote",
    description="Register a new price quote for a symbol.",
)
def register_quote(
    quote: RegisterQuoteRequest,
    use_case: RegisterQuoteUseCase = Depends(get_register_quote_use_case),
) -> QuoteItem:
    command = RegisterQuoteCommand(
        symbol=quote.symbol,
        rate=quote.rate,
        timestamp=quote.time_stamp,
    )
    return _quote_item(use_case.execute(command))


# ── Portfolios ───────────────────────────────────────────────────


@portfolio_router.get(
    "/{portfolio_id}",
    response_model=PortfolioResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Get portfolio",
    description="Return a portfolio with its trades and current holdings.",
)
def get_portfolio(
    portfolio_id: int,
    use_case: GetPortfolioUseCase = Depends(get_portfolio_use_case),
) -> PortfolioResponse:
    result = use_case.execute(GetPortfolioQuery(portfolio_id=portfolio_id))
    return _portfolio_response(result)


@portfolio_router.post(
    "",
    response_model=PortfolioResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register portfolio",
)
def create_portfolio(
    portfolio: CreatePortfolioRequest,
    use_case: CreatePortfolioUseCase = Depends(get_create_portfolio_use_case),
) -> PortfolioResponse:
    result = use_case.execute(CreatePortfolioCommand(name=portfolio.name))
    return _portfolio_response(result)
