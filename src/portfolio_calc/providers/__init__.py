"""Price and statement providers module."""

from portfolio_calc.providers.price_provider import PriceProvider, StatementProvider
from portfolio_calc.providers.stub_provider import StubPriceProvider, StubStatementProvider

__all__ = [
    "PriceProvider",
    "StatementProvider",
    "StubPriceProvider",
    "StubStatementProvider",
]
