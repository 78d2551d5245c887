"""Domain models package."""

from portfolio_calc.domain.models.enums import (
    AccountType,
    InstrumentType,
    PricingModel,
    ReconciliationStatus,
)
from portfolio_calc.domain.models.money import (
    MONEY_SCALE,
    QUANTITY_SCALE,
    Money,
    Quantity,
)
from portfolio_calc.domain.models.position import Holding, Position, normalize_symbol
from portfolio_calc.domain.models.cash_flow import CashFlow, Purchase
from portfolio_calc.domain.models.instrument import Account, Instrument
from portfolio_calc.domain.models.snapshot import PositionSnapshot, StatementValue

__all__ = [
    "AccountType",
    "InstrumentType",
    "PricingModel",
    "ReconciliationStatus",
    "MONEY_SCALE",
    "QUANTITY_SCALE",
    "Money",
    "Quantity",
    "Holding",
    "Position",
    "normalize_symbol",
    "CashFlow",
    "Purchase",
    "Account",
    "Instrument",
    "PositionSnapshot",
    "StatementValue",
]
