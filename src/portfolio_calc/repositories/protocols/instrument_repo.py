"""Instrument repository protocol."""

from typing import Protocol, Optional

from portfolio_calc.domain.models import Instrument


class InstrumentRepository(Protocol):
    """Interface for instrument reference data."""

    def get(self, symbol: str) -> Optional[Instrument]:
        """Retrieve instrument by symbol."""
        ...
