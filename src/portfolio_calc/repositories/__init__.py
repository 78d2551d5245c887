"""Repository layer - data access interfaces and in-memory implementations."""

from portfolio_calc.repositories.protocols import (
    HoldingRepository,
    InstrumentRepository,
    TransactionRepository,
)
from portfolio_calc.repositories.memory import (
    InMemoryHoldingRepository,
    InMemoryInstrumentRepository,
    InMemoryTransactionRepository,
)

__all__ = [
    "HoldingRepository",
    "InstrumentRepository",
    "TransactionRepository",
    "InMemoryHoldingRepository",
    "InMemoryInstrumentRepository",
    "InMemoryTransactionRepository",
]
