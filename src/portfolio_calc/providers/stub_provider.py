"""Stub price and statement providers for offline/testing use."""

from decimal import Decimal
from typing import Optional

from portfolio_calc.domain.models import Money, StatementValue


# Deterministic fake prices for common Warsaw-listed symbols
_STUB_PRICES: dict[str, Decimal] = {
    "PKO": Decimal("58.40"),
    "PZU": Decimal("48.12"),
    "CDR": Decimal("142.75"),
    "KGH": Decimal("151.30"),
    "ETFBW20TR": Decimal("112.85"),
    "ETFBSPXPL": Decimal("189.50"),
}


class StubPriceProvider:
    """
    Stub provider with fixed prices for offline operation.

    Unknown symbols get no price, so callers see them as unavailable.
    """

    def __init__(
        self,
        prices: Optional[dict[str, Decimal]] = None,
        currency: str = "PLN",
    ):
        source = _STUB_PRICES if prices is None else prices
        self._prices = {symbol.upper(): Decimal(price) for symbol, price in source.items()}
        self._currency = currency

    def get_prices(self, symbols: list[str]) -> dict[str, Money]:
        """Return stub prices for requested symbols that are known."""
        result: dict[str, Money] = {}
        for symbol in symbols:
            upper_symbol = symbol.upper()
            if upper_symbol in self._prices:
                result[upper_symbol] = Money(self._prices[upper_symbol], self._currency)
        return result

    def set_price(self, symbol: str, price: Decimal) -> None:
        self._prices[symbol.upper()] = Decimal(price)


class StubStatementProvider:
    """Statement provider backed by a fixed mapping."""

    def __init__(self, statements: Optional[dict[str, StatementValue]] = None):
        self._statements = {
            symbol.upper(): value for symbol, value in (statements or {}).items()
        }

    def get_statement_values(self, symbols: list[str]) -> dict[str, StatementValue]:
        """Return statement values for requested symbols that are known."""
        return {
            symbol.upper(): self._statements[symbol.upper()]
            for symbol in symbols
            if symbol.upper() in self._statements
        }
