"""Core utilities and shared functionality."""

from portfolio_calc.core.timezone import (
    get_market_tz,
    now_market,
    today_market,
    to_market,
    parse_datetime_market,
    to_calendar_date,
)
from portfolio_calc.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InvalidInputError,
    CurrencyMismatchError,
    EmptyAggregationError,
    DataUnavailableError,
    PriceUnavailableError,
    XirrNotComputableError,
    NoSolutionError,
    NoConvergenceError,
)

__all__ = [
    "get_market_tz",
    "now_market",
    "today_market",
    "to_market",
    "parse_datetime_market",
    "to_calendar_date",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InvalidInputError",
    "CurrencyMismatchError",
    "EmptyAggregationError",
    "DataUnavailableError",
    "PriceUnavailableError",
    "XirrNotComputableError",
    "NoSolutionError",
    "NoConvergenceError",
]
