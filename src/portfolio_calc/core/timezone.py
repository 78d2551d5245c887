"""Timezone utilities for market-local calendar dates."""

from datetime import date, datetime
from typing import Optional, Union

import pytz
from dateutil import parser as date_parser

from portfolio_calc.config.settings import get_settings

DateLike = Union[date, datetime, str]


def get_market_tz() -> pytz.BaseTzInfo:
    """Return the configured market timezone."""
    return pytz.timezone(get_settings().market_timezone)


def now_market() -> datetime:
    """Return current time in the market timezone."""
    return datetime.now(get_market_tz())


def today_market() -> date:
    """Return today's calendar date in the market timezone."""
    return now_market().date()


def to_market(dt: datetime) -> datetime:
    """Convert a datetime to the market timezone."""
    tz = get_market_tz()
    if dt.tzinfo is None:
        # Naive datetimes are taken as already market-local
        return tz.localize(dt)
    return dt.astimezone(tz)


def parse_datetime_market(value: str, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it in the market timezone.

    If no timezone is provided in the string, assumes market time.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None:
        tz = default_tz or get_market_tz()
        dt = tz.localize(dt)
    return to_market(dt)


def to_calendar_date(value: DateLike) -> date:
    """
    Normalize a date-like value to a whole calendar day.

    Day-count arithmetic works on whole days in a single calendar, so
    aware datetimes are first moved into the market timezone.
    """
    if isinstance(value, datetime):
        return to_market(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_datetime_market(value).date()
    raise TypeError(f"Unsupported date value: {value!r}")
