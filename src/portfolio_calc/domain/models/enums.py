"""Enumerations for domain models."""

from enum import Enum


class PricingModel(str, Enum):
    """How an instrument's current value is obtained."""

    UNIT_PRICE = "UNIT_PRICE"  # quantity x current price
    STATEMENT = "STATEMENT"  # invested/current value supplied directly


class InstrumentType(str, Enum):
    """Types of tracked instruments."""

    STOCK = "STOCK"
    ETF = "ETF"
    BOND_ETF = "BOND_ETF"
    POLISH_GOV_BOND = "POLISH_GOV_BOND"  # held to maturity, valued by statement

    @property
    def pricing_model(self) -> PricingModel:
        if self is InstrumentType.POLISH_GOV_BOND:
            return PricingModel.STATEMENT
        return PricingModel.UNIT_PRICE


class AccountType(str, Enum):
    """Brokerage account tax wrappers."""

    NORMAL = "NORMAL"
    IKE = "IKE"  # tax-advantaged retirement
    IKZE = "IKZE"  # tax-deductible retirement


class ReconciliationStatus(str, Enum):
    """Outcome of comparing one instrument across two snapshots."""

    MATCHED = "MATCHED"
    QUANTITY_MISMATCH = "QUANTITY_MISMATCH"
    VALUE_MISMATCH = "VALUE_MISMATCH"
    MISSING_IN_SYSTEM = "MISSING_IN_SYSTEM"
    MISSING_IN_SOURCE = "MISSING_IN_SOURCE"
