"""Repository protocol definitions (interfaces)."""

from portfolio_calc.repositories.protocols.holding_repo import HoldingRepository
from portfolio_calc.repositories.protocols.instrument_repo import InstrumentRepository
from portfolio_calc.repositories.protocols.transaction_repo import TransactionRepository

__all__ = [
    "HoldingRepository",
    "InstrumentRepository",
    "TransactionRepository",
]
