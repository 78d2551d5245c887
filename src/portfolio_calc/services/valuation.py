"""Valuation and profit/loss derivation for positions and portfolios."""

from decimal import Decimal, localcontext
from typing import Iterable, Optional

from portfolio_calc.core.exceptions import (
    CurrencyMismatchError,
    InvalidInputError,
    PriceUnavailableError,
)
from portfolio_calc.domain.models import Money, Position, Quantity, StatementValue
from portfolio_calc.domain.models.money import CALC_PRECISION
from portfolio_calc.domain.views import PortfolioValuation, Valuation

_HUNDRED = Decimal("100")


def profit_loss_percentage(invested: Money, current_value: Money) -> Decimal:
    """
    Return (current - invested) / invested × 100 at full precision.

    Zero only for the empty case (both exactly zero); any other
    zero-invested state is a data error.
    """
    if invested.is_zero:
        if current_value.is_zero:
            return Decimal("0")
        raise InvalidInputError(
            f"Invested amount is zero but current value is {current_value}"
        )
    profit_loss = current_value - invested
    with localcontext() as ctx:
        ctx.prec = CALC_PRECISION
        return profit_loss.amount / invested.amount * _HUNDRED


def _build(invested: Money, current_value: Money) -> Valuation:
    return Valuation(
        invested=invested,
        current_value=current_value,
        profit_loss=current_value - invested,
        profit_loss_percentage=profit_loss_percentage(invested, current_value),
    )


def valuate_unit_priced(
    quantity: Quantity,
    average_cost: Money,
    current_price: Optional[Money],
    symbol: str = "",
) -> Valuation:
    """
    Value a unit-priced instrument (stock, ETF).

    invested = average_cost × quantity; current = current_price × quantity.
    A missing or non-positive price is reported as unavailable, never
    replaced by a default.
    """
    if current_price is None or not current_price.is_positive:
        raise PriceUnavailableError(symbol or "instrument")
    if current_price.currency != average_cost.currency:
        raise CurrencyMismatchError(average_cost.currency, current_price.currency)

    invested = average_cost.multiply(quantity)
    current_value = current_price.multiply(quantity)
    return _build(invested, current_value)


def valuate_position(position: Position, current_price: Optional[Money]) -> Valuation:
    """Value an aggregate position at a unit price."""
    return valuate_unit_priced(
        position.total_quantity,
        position.average_cost,
        current_price,
        symbol=position.symbol,
    )


def valuate_statement(invested: Money, current_value: Money) -> Valuation:
    """
    Value a statement-valued instrument (bonds held to maturity).

    Both figures come from the statement as-is; neither is derived from the other.
    """
    if invested.currency != current_value.currency:
        raise CurrencyMismatchError(invested.currency, current_value.currency)
    if invested.is_negative or current_value.is_negative:
        raise InvalidInputError("Statement values cannot be negative")
    return _build(invested, current_value)


def valuate_statement_value(statement: StatementValue) -> Valuation:
    """Value from a StatementValue supplied by a statement provider."""
    return valuate_statement(statement.invested, statement.current_value)


def valuate_portfolio(valuations: Iterable[Valuation], currency: str) -> PortfolioValuation:
    """
    Roll position valuations up into portfolio totals.

    Amounts are summed; the percentage is derived from the sums, never by
    averaging per-position percentages.
    """
    total_invested = Money.zero(currency)
    total_current = Money.zero(currency)
    count = 0
    for valuation in valuations:
        total_invested = total_invested + valuation.invested
        total_current = total_current + valuation.current_value
        count += 1

    return PortfolioValuation(
        total_invested=total_invested,
        total_current_value=total_current,
        total_profit_loss=total_current - total_invested,
        total_profit_loss_percentage=profit_loss_percentage(total_invested, total_current),
        positions_count=count,
    )
