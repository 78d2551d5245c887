"""Transaction history repository protocol."""

from typing import Protocol

from portfolio_calc.domain.models import Purchase


class TransactionRepository(Protocol):
    """
    Interface for buy-transaction history.

    Dates must come from a single calendar; day counts assume whole days.
    """

    def list_purchases(self, symbol: str) -> list[Purchase]:
        """List buy transactions for a symbol, in any order."""
        ...
