"""Holding and aggregate Position domain models."""

from dataclasses import dataclass
from typing import Optional

from portfolio_calc.core.exceptions import InvalidInputError
from portfolio_calc.domain.models.money import Money, Quantity


def normalize_symbol(symbol: str) -> str:
    """Return the natural-key form of an instrument symbol."""
    if not isinstance(symbol, str) or not symbol.strip():
        raise InvalidInputError("Instrument symbol cannot be empty")
    return symbol.strip().upper()


@dataclass(frozen=True)
class Holding:
    """
    One account's stake in one instrument.

    cost_basis is the average cost per unit inside that account.
    Replaced (never patched) when a new import or manual edit arrives.
    """

    account_id: str
    quantity: Quantity
    cost_basis: Money

    def __post_init__(self) -> None:
        if not isinstance(self.account_id, str) or not self.account_id.strip():
            raise InvalidInputError("Holding account_id cannot be empty")
        if not isinstance(self.quantity, Quantity):
            object.__setattr__(self, "quantity", Quantity(self.quantity))
        if not isinstance(self.cost_basis, Money):
            raise InvalidInputError("Holding cost_basis must be Money")
        if not self.cost_basis.is_positive:
            raise InvalidInputError(
                f"Holding cost basis must be positive, got {self.cost_basis}"
            )

    @property
    def currency(self) -> str:
        return self.cost_basis.currency


@dataclass(frozen=True)
class Position:
    """
    Aggregated holding of one instrument across all accounts.

    IMPORTANT: Never construct directly; use services.aggregation.build_position
    so total_quantity and average_cost are derived from the full holding list.
    """

    symbol: str
    holdings: tuple[Holding, ...]
    total_quantity: Quantity
    average_cost: Money

    @property
    def currency(self) -> str:
        return self.average_cost.currency

    @property
    def account_ids(self) -> list[str]:
        return [h.account_id for h in self.holdings]

    def holding_for(self, account_id: str) -> Optional[Holding]:
        """Return the holding for an account, if the account contributes."""
        for holding in self.holdings:
            if holding.account_id == account_id:
                return holding
        return None
