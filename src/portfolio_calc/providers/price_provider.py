"""Price and statement provider protocols."""

from typing import Protocol

from portfolio_calc.domain.models import Money, StatementValue


class PriceProvider(Protocol):
    """
    Protocol for market price sources.

    Implementations return a positive current unit price per symbol.
    Symbols without a price are omitted; callers treat that as unavailable.
    """

    def get_prices(self, symbols: list[str]) -> dict[str, Money]:
        """Fetch current prices for multiple symbols."""
        ...


class StatementProvider(Protocol):
    """
    Protocol for statement-valued instruments (bonds held to maturity).

    Implementations return invested and current value as reported by the issuer.
    """

    def get_statement_values(self, symbols: list[str]) -> dict[str, StatementValue]:
        """Fetch statement values for multiple symbols; missing symbols are omitted."""
        ...
