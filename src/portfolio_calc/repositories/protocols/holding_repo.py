"""Holding repository protocol."""

from typing import Protocol

from portfolio_calc.domain.models import Holding


class HoldingRepository(Protocol):
    """
    Interface for holding data access.

    All holdings returned for one symbol must share a currency.
    """

    def list_holdings(self, symbol: str) -> list[Holding]:
        """List every account's holding for a symbol (empty if none)."""
        ...

    def list_symbols(self) -> list[str]:
        """List symbols that have at least one holding."""
        ...
