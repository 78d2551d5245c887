"""Point-in-time position shapes exchanged with external sources."""

from dataclasses import dataclass

from portfolio_calc.core.exceptions import CurrencyMismatchError, InvalidInputError
from portfolio_calc.domain.models.money import Money, Quantity
from portfolio_calc.domain.models.position import normalize_symbol


@dataclass(frozen=True)
class PositionSnapshot:
    """Quantity and current value of one instrument, from either side of a reconciliation."""

    symbol: str
    quantity: Quantity
    value: Money

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", normalize_symbol(self.symbol))
        if not isinstance(self.quantity, Quantity):
            object.__setattr__(self, "quantity", Quantity(self.quantity))
        if not isinstance(self.value, Money):
            raise InvalidInputError("PositionSnapshot value must be Money")
        if self.value.is_negative:
            raise InvalidInputError(f"Position value cannot be negative, got {self.value}")


@dataclass(frozen=True)
class StatementValue:
    """Invested and current value reported directly for a statement-valued instrument."""

    invested: Money
    current_value: Money

    def __post_init__(self) -> None:
        if self.invested.currency != self.current_value.currency:
            raise CurrencyMismatchError(self.invested.currency, self.current_value.currency)
