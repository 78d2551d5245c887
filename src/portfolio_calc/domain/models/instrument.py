"""Instrument and Account reference models."""

from dataclasses import dataclass

from portfolio_calc.core.exceptions import InvalidInputError
from portfolio_calc.domain.models.enums import AccountType, InstrumentType, PricingModel
from portfolio_calc.domain.models.position import normalize_symbol


@dataclass(frozen=True)
class Instrument:
    """Reference data for a tracked instrument, keyed by symbol (ticker or ISIN)."""

    symbol: str
    name: str
    instrument_type: InstrumentType = InstrumentType.STOCK
    currency: str = "PLN"

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", normalize_symbol(self.symbol))
        if isinstance(self.instrument_type, str):
            object.__setattr__(self, "instrument_type", InstrumentType(self.instrument_type))
        if not self.name or not self.name.strip():
            raise InvalidInputError("Instrument name cannot be empty")

    @property
    def pricing_model(self) -> PricingModel:
        return self.instrument_type.pricing_model


@dataclass(frozen=True)
class Account:
    """Brokerage account that holdings belong to."""

    account_id: str
    name: str
    broker_name: str
    account_type: AccountType = AccountType.NORMAL

    def __post_init__(self) -> None:
        if isinstance(self.account_type, str):
            object.__setattr__(self, "account_type", AccountType(self.account_type))
        if not self.name or not self.name.strip():
            raise InvalidInputError("Account name cannot be empty")
        if not self.broker_name or not self.broker_name.strip():
            raise InvalidInputError("Account broker name cannot be empty")
