"""Domain layer - immutable value types with no I/O."""

from portfolio_calc.domain.models import (
    Account,
    AccountType,
    CashFlow,
    Holding,
    Instrument,
    InstrumentType,
    Money,
    Position,
    PositionSnapshot,
    PricingModel,
    Purchase,
    Quantity,
    ReconciliationStatus,
    StatementValue,
)

__all__ = [
    "Account",
    "AccountType",
    "CashFlow",
    "Holding",
    "Instrument",
    "InstrumentType",
    "Money",
    "Position",
    "PositionSnapshot",
    "PricingModel",
    "Purchase",
    "Quantity",
    "ReconciliationStatus",
    "StatementValue",
]
