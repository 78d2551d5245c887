"""Dated cash flows for return calculations."""

from dataclasses import dataclass
from datetime import date

from portfolio_calc.core.exceptions import InvalidInputError
from portfolio_calc.core.timezone import to_calendar_date
from portfolio_calc.domain.models.money import Money
from portfolio_calc.domain.models.position import normalize_symbol


@dataclass(frozen=True)
class CashFlow:
    """
    Signed money movement on a calendar date.

    Negative = money put into the position (purchase).
    Positive = money out, or the terminal valuation on the as-of date.
    """

    flow_date: date
    amount: Money

    def __post_init__(self) -> None:
        object.__setattr__(self, "flow_date", to_calendar_date(self.flow_date))
        if not isinstance(self.amount, Money):
            raise InvalidInputError("CashFlow amount must be Money")

    @classmethod
    def outflow(cls, flow_date, amount: Money) -> "CashFlow":
        """Money invested on a date (stored negative)."""
        return cls(flow_date, -amount.abs())

    @classmethod
    def inflow(cls, flow_date, amount: Money) -> "CashFlow":
        """Money returned or valued on a date (stored positive)."""
        return cls(flow_date, amount.abs())


@dataclass(frozen=True)
class Purchase:
    """One buy transaction from the transaction history."""

    symbol: str
    trade_date: date
    amount: Money

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", normalize_symbol(self.symbol))
        object.__setattr__(self, "trade_date", to_calendar_date(self.trade_date))
        if not isinstance(self.amount, Money) or not self.amount.is_positive:
            raise InvalidInputError(
                f"Purchase amount must be positive Money, got {self.amount!r}"
            )

    def to_cash_flow(self) -> CashFlow:
        return CashFlow.outflow(self.trade_date, self.amount)
