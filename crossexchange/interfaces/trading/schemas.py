"""
Pydantic schemas for trading API request/response validation.

These schemas enforce input validation and define the API contract.
JSON field names are PascalCase (``NoOfShares``, ``PortfolioId``);
request bodies also accept the snake_case attribute names.
No business logic belongs here.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

SYMBOL_DESCRIPTION = "Share symbol"
SYMBOL_PATTERN = r"^[A-Z0-9]+$"
SYMBOL_MIN_LEN = 1
SYMBOL_MAX_LEN = 10


class ApiModel(BaseModel):
    """Base schema using PascalCase JSON names."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


class TradeRequest(ApiModel):
    """Request schema for the buy and sell endpoints.

    Attributes:
        symbol: Share symbol (1-10 uppercase chars).
        no_of_shares: Number of shares to trade (> 0).
        portfolio_id: Portfolio to trade for.
    """

    symbol: str = Field(
        ...,
        min_length=SYMBOL_MIN_LEN,
        max_length=SYMBOL_MAX_LEN,
        pattern=SYMBOL_PATTERN,
        description=SYMBOL_DESCRIPTION,
    )
    no_of_shares: int = Field(..., gt=0, description="Number of shares to trade")
    portfolio_id: int = Field(..., description="Portfolio id")


class TradeItem(ApiModel):
    """An executed trade in the response."""

    symbol: str
    action: Literal["BUY", "SELL"]
    no_of_shares: int
    price: Decimal
    portfolio_id: int


class RegisterQuoteRequest(ApiModel):
    """Request schema for registering a share price quote.

    Attributes:
        symbol: Share symbol (1-10 uppercase chars).
        rate: Price of one share (> 0).
        time_stamp: Quote time; the server time is used when omitted.
    """

    symbol: str = Field(
        ...,
        min_length=SYMBOL_MIN_LEN,
        max_length=SYMBOL_MAX_LEN,
        pattern=SYMBOL_PATTERN,
        description=SYMBOL_DESCRIPTION,
    )
    rate: Decimal = Field(..., gt=0, max_digits=18, decimal_places=4)
    time_stamp: datetime | None = Field(default=None, description="Quote time")


class QuoteItem(ApiModel):
    """A share price quote in the response."""

    symbol: str
    rate: Decimal
    time_stamp: datetime


class CreatePortfolioRequest(ApiModel):
    """Request schema for registering a portfolio."""

    name: str = Field(..., min_length=1, max_length=100)


class PortfolioResponse(ApiModel):
    """Response schema for a portfolio with its trades and holdings."""

    id: int
    name: str
    trades: list[TradeItem]
    holdings: dict[str, int]


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: str | None = None


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str
    version: str
    database: str
