"""In-memory implementation of InstrumentRepository."""

from typing import Optional

from portfolio_calc.domain.models import Instrument, normalize_symbol


class InMemoryInstrumentRepository:
    """Dict-backed instrument reference data."""

    def __init__(self) -> None:
        self._instruments: dict[str, Instrument] = {}

    def get(self, symbol: str) -> Optional[Instrument]:
        """Retrieve instrument by symbol."""
        return self._instruments.get(normalize_symbol(symbol))

    def add(self, instrument: Instrument) -> Instrument:
        """Register or replace an instrument."""
        self._instruments[instrument.symbol] = instrument
        return instrument
