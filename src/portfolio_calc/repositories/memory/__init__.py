"""In-memory repository implementations."""

from portfolio_calc.repositories.memory.holding_repo import InMemoryHoldingRepository
from portfolio_calc.repositories.memory.instrument_repo import InMemoryInstrumentRepository
from portfolio_calc.repositories.memory.transaction_repo import InMemoryTransactionRepository

__all__ = [
    "InMemoryHoldingRepository",
    "InMemoryInstrumentRepository",
    "InMemoryTransactionRepository",
]
