"""
Pytest configuration and fixtures for the portfolio calculation engine tests.

This module provides:
- Settings isolation (fresh Settings per test)
- Money / Quantity / Holding factory helpers
- In-memory repository and stub provider fixtures
- Service fixtures, including a populated sample portfolio
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

import pytest

from portfolio_calc.config.settings import Settings, reset_settings, set_settings
from portfolio_calc.domain.models import (
    Holding,
    Instrument,
    InstrumentType,
    Money,
    PositionSnapshot,
    Purchase,
    Quantity,
    StatementValue,
)
from portfolio_calc.providers import StubPriceProvider, StubStatementProvider
from portfolio_calc.repositories import (
    InMemoryHoldingRepository,
    InMemoryInstrumentRepository,
    InMemoryTransactionRepository,
)
from portfolio_calc.services import PortfolioService, ReconciliationService, XirrSolver

Amount = Union[Decimal, int, str]


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture(autouse=True)
def test_settings() -> Settings:
    """Install deterministic settings for every test and reset afterwards."""
    reset_settings()
    settings = Settings(
        base_currency="PLN",
        market_timezone="Europe/Warsaw",
        xirr_tolerance=1e-6,
        xirr_max_iterations=100,
        xirr_initial_guess=0.1,
        reconciliation_quantity_tolerance=Decimal("0"),
        reconciliation_value_tolerance_percent=Decimal("1.0"),
    )
    set_settings(settings)
    yield settings
    reset_settings()


# =============================================================================
# FACTORY HELPERS (exported for use in tests)
# =============================================================================


def pln(amount: Amount) -> Money:
    """Money in PLN."""
    return Money(Decimal(amount), "PLN")


def qty(value: Amount) -> Quantity:
    """Quantity from an exact value."""
    return Quantity(Decimal(value))


def make_holding(account_id: str, quantity: Amount, cost: Amount, currency: str = "PLN") -> Holding:
    """Holding with a per-unit cost basis."""
    return Holding(
        account_id=account_id,
        quantity=qty(quantity),
        cost_basis=Money(Decimal(cost), currency),
    )


def make_snapshot(symbol: str, quantity: Amount, value: Amount) -> PositionSnapshot:
    """PositionSnapshot in PLN."""
    return PositionSnapshot(symbol=symbol, quantity=qty(quantity), value=pln(value))


def make_purchase(symbol: str, trade_date: date, amount: Amount) -> Purchase:
    """Buy transaction in PLN."""
    return Purchase(symbol=symbol, trade_date=trade_date, amount=pln(amount))


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


# =============================================================================
# REPOSITORY AND PROVIDER FIXTURES
# =============================================================================


@pytest.fixture
def holding_repo() -> InMemoryHoldingRepository:
    """Provide empty HoldingRepository."""
    return InMemoryHoldingRepository()


@pytest.fixture
def instrument_repo() -> InMemoryInstrumentRepository:
    """Provide empty InstrumentRepository."""
    return InMemoryInstrumentRepository()


@pytest.fixture
def transaction_repo() -> InMemoryTransactionRepository:
    """Provide empty TransactionRepository."""
    return InMemoryTransactionRepository()


@pytest.fixture
def price_provider() -> StubPriceProvider:
    """Provide price provider with fixed prices for the sample portfolio."""
    return StubPriceProvider(
        prices={
            "PKO": Decimal("1400"),
            "ETFBW20TR": Decimal("120"),
        }
    )


@pytest.fixture
def statement_provider() -> StubStatementProvider:
    """Provide statement provider for the sample bond."""
    return StubStatementProvider(
        statements={
            "EDO0934": StatementValue(invested=pln("10000"), current_value=pln("10650")),
        }
    )


@pytest.fixture
def xirr_solver(test_settings) -> XirrSolver:
    """Provide solver configured from test settings."""
    return XirrSolver.from_settings(test_settings)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_service(
    holding_repo,
    instrument_repo,
    transaction_repo,
    price_provider,
    statement_provider,
    test_settings,
) -> PortfolioService:
    """Provide PortfolioService over in-memory collaborators."""
    return PortfolioService(
        holding_repo=holding_repo,
        instrument_repo=instrument_repo,
        transaction_repo=transaction_repo,
        price_provider=price_provider,
        statement_provider=statement_provider,
        settings=test_settings,
    )


@pytest.fixture
def reconciliation_service(portfolio_service, test_settings) -> ReconciliationService:
    """Provide ReconciliationService over the portfolio service."""
    return ReconciliationService(
        portfolio_service=portfolio_service,
        settings=test_settings,
    )


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================

SAMPLE_BUY_DATE = date(2023, 1, 2)
SAMPLE_AS_OF = date(2024, 1, 2)  # exactly 365 days later


@pytest.fixture
def sample_portfolio(holding_repo, instrument_repo, transaction_repo) -> dict:
    """
    Populate repositories with three positions.

    PKO:        60 + 40 units @ 1200, price 1400 -> invested 120000, value 140000
    ETFBW20TR:  100 units @ 100, price 120      -> invested 10000, value 12000
    EDO0934:    statement-valued bond           -> invested 10000, value 10650
    All bought on SAMPLE_BUY_DATE.
    """
    instrument_repo.add(Instrument("PKO", "PKO Bank Polski", InstrumentType.STOCK))
    instrument_repo.add(Instrument("ETFBW20TR", "Beta ETF WIG20TR", InstrumentType.ETF))
    instrument_repo.add(
        Instrument("EDO0934", "10-year inflation-linked bond", InstrumentType.POLISH_GOV_BOND)
    )

    holding_repo.upsert("PKO", make_holding("acc-ike", "60", "1200"))
    holding_repo.upsert("PKO", make_holding("acc-normal", "40", "1200"))
    holding_repo.upsert("ETFBW20TR", make_holding("acc-ike", "100", "100"))
    holding_repo.upsert("EDO0934", make_holding("acc-bonds", "100", "100"))

    transaction_repo.add(make_purchase("PKO", SAMPLE_BUY_DATE, "72000"))
    transaction_repo.add(make_purchase("PKO", SAMPLE_BUY_DATE, "48000"))
    transaction_repo.add(make_purchase("ETFBW20TR", SAMPLE_BUY_DATE, "10000"))
    transaction_repo.add(make_purchase("EDO0934", SAMPLE_BUY_DATE, "10000"))

    return {
        "as_of": SAMPLE_AS_OF,
        "invested": pln("140000"),
        "current_value": pln("162650"),
    }
