"""Aggregation of per-account holdings into a single position."""

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Iterable, Mapping, Optional, Sequence

from portfolio_calc.core.exceptions import (
    CurrencyMismatchError,
    EmptyAggregationError,
    InvalidInputError,
)
from portfolio_calc.domain.models import Holding, Money, Position, Quantity, normalize_symbol
from portfolio_calc.domain.models.money import CALC_PRECISION


@dataclass(frozen=True)
class AggregateResult:
    """Derived fields of a position."""

    total_quantity: Quantity
    weighted_average_cost: Money


def aggregate(holdings: Sequence[Holding], symbol: str = "") -> AggregateResult:
    """
    Combine holdings of one instrument into total quantity and weighted average cost.

    Formula: avg = Σ(quantity × cost) / Σ quantity

    Products and sums are kept at full precision; the average is rounded
    once, half-even, to money scale. Always run over the full list.
    """
    if not holdings:
        raise EmptyAggregationError(symbol)

    currency = holdings[0].currency
    with localcontext() as ctx:
        ctx.prec = CALC_PRECISION
        total_quantity = Decimal("0")
        total_cost = Decimal("0")
        for holding in holdings:
            if holding.currency != currency:
                raise CurrencyMismatchError(currency, holding.currency)
            total_quantity += holding.quantity.value
            total_cost += holding.quantity.value * holding.cost_basis.amount
        average = total_cost / total_quantity

    return AggregateResult(
        total_quantity=Quantity(total_quantity),
        weighted_average_cost=Money(average, currency),
    )


def build_position(symbol: str, holdings: Iterable[Holding]) -> Position:
    """
    Build a Position from its full holding list.

    This is the only supported way to obtain a Position; derived fields are
    recomputed from scratch so a partially-updated state is never observable.
    """
    symbol = normalize_symbol(symbol)
    holdings = tuple(holdings)

    seen: set[str] = set()
    for holding in holdings:
        if holding.account_id in seen:
            raise InvalidInputError(
                f"Duplicate holding for account {holding.account_id} in {symbol}"
            )
        seen.add(holding.account_id)

    result = aggregate(holdings, symbol)
    return Position(
        symbol=symbol,
        holdings=holdings,
        total_quantity=result.total_quantity,
        average_cost=result.weighted_average_cost,
    )


def replace_holding(position: Position, holding: Holding) -> Position:
    """Return a new Position with the account's holding added or replaced."""
    others = [h for h in position.holdings if h.account_id != holding.account_id]
    return build_position(position.symbol, [*others, holding])


def remove_holding(position: Position, account_id: str) -> Optional[Position]:
    """
    Return a new Position without the account's holding.

    Returns None when the last holding is removed; a Position never
    exists without at least one holding.
    """
    remaining = [h for h in position.holdings if h.account_id != account_id]
    if len(remaining) == len(position.holdings):
        raise InvalidInputError(
            f"Account {account_id} has no holding in {position.symbol}"
        )
    if not remaining:
        return None
    return build_position(position.symbol, remaining)


def aggregate_positions(holdings_by_symbol: Mapping[str, Sequence[Holding]]) -> list[Position]:
    """Build every position of a portfolio, sorted by symbol."""
    positions = [
        build_position(symbol, holdings)
        for symbol, holdings in holdings_by_symbol.items()
    ]
    return sorted(positions, key=lambda p: p.symbol)
