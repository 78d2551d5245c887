"""
Unit tests for reference and transaction models.

Tests cover:
- Instrument pricing model by type
- Account validation
- Purchase and CashFlow signs
- Snapshot and statement invariants
- Repository behavior
"""

from datetime import date
from decimal import Decimal

import pytest

from portfolio_calc.core.exceptions import CurrencyMismatchError, InvalidInputError
from portfolio_calc.domain.models import (
    Account,
    AccountType,
    CashFlow,
    Instrument,
    InstrumentType,
    Money,
    PositionSnapshot,
    PricingModel,
    Purchase,
    StatementValue,
)
from portfolio_calc.repositories import (
    InMemoryHoldingRepository,
    InMemoryTransactionRepository,
)

from tests.conftest import make_holding, make_purchase, pln, qty


# =============================================================================
# REFERENCE DATA
# =============================================================================


class TestInstrument:
    """Tests for Instrument."""

    @pytest.mark.parametrize(
        "instrument_type,expected",
        [
            (InstrumentType.STOCK, PricingModel.UNIT_PRICE),
            (InstrumentType.ETF, PricingModel.UNIT_PRICE),
            (InstrumentType.BOND_ETF, PricingModel.UNIT_PRICE),
            (InstrumentType.POLISH_GOV_BOND, PricingModel.STATEMENT),
        ],
    )
    def test_pricing_model(self, instrument_type, expected):
        assert Instrument("X", "Name", instrument_type).pricing_model is expected

    def test_string_type_coerced(self):
        instrument = Instrument(" edo0934 ", "Bond", "POLISH_GOV_BOND")

        assert instrument.symbol == "EDO0934"
        assert instrument.instrument_type is InstrumentType.POLISH_GOV_BOND

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidInputError):
            Instrument("PKO", "  ")

    def test_blank_symbol_rejected(self):
        with pytest.raises(InvalidInputError):
            Instrument("", "Name")


class TestAccount:
    """Tests for Account."""

    def test_defaults_to_normal(self):
        assert Account("acc-1", "Main", "mBank").account_type is AccountType.NORMAL

    def test_string_type_coerced(self):
        assert Account("acc-2", "Retirement", "XTB", "IKE").account_type is AccountType.IKE

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            Account("acc-3", "Other", "XTB", "ROTH")

    @pytest.mark.parametrize("name,broker", [("", "XTB"), ("Main", " ")])
    def test_blank_fields_rejected(self, name, broker):
        with pytest.raises(InvalidInputError):
            Account("acc-4", name, broker)


# =============================================================================
# TRANSACTIONS AND CASH FLOWS
# =============================================================================


class TestCashFlows:
    """Tests for Purchase and CashFlow."""

    def test_purchase_becomes_outflow(self):
        flow = make_purchase("pko", date(2023, 1, 2), "1000").to_cash_flow()

        assert flow.amount == pln("-1000")
        assert flow.flow_date == date(2023, 1, 2)

    def test_inflow_and_outflow_signs(self):
        assert CashFlow.outflow(date(2023, 1, 1), pln("-5")).amount == pln("-5")
        assert CashFlow.outflow(date(2023, 1, 1), pln("5")).amount == pln("-5")
        assert CashFlow.inflow(date(2023, 1, 1), pln("-5")).amount == pln("5")

    def test_flow_date_accepts_string(self):
        assert CashFlow("2023-05-01", pln("1")).flow_date == date(2023, 5, 1)

    @pytest.mark.parametrize("amount", ["0", "-10"])
    def test_purchase_must_be_positive(self, amount):
        with pytest.raises(InvalidInputError):
            Purchase("PKO", date(2023, 1, 1), pln(amount))

    def test_cash_flow_requires_money(self):
        with pytest.raises(InvalidInputError):
            CashFlow(date(2023, 1, 1), Decimal("10"))


# =============================================================================
# SNAPSHOTS
# =============================================================================


class TestSnapshots:
    """Tests for PositionSnapshot and StatementValue."""

    def test_snapshot_coerces_quantity(self):
        snapshot = PositionSnapshot("pzu", Decimal("5"), pln("200"))

        assert snapshot.symbol == "PZU"
        assert snapshot.quantity == qty("5")

    def test_snapshot_rejects_negative_value(self):
        with pytest.raises(InvalidInputError):
            PositionSnapshot("PZU", qty("5"), pln("-1"))

    def test_snapshot_rejects_zero_quantity(self):
        with pytest.raises(InvalidInputError):
            PositionSnapshot("PZU", Decimal("0"), pln("1"))

    def test_statement_currency_must_match(self):
        with pytest.raises(CurrencyMismatchError):
            StatementValue(pln("1"), Money(Decimal("1"), "USD"))


# =============================================================================
# REPOSITORIES
# =============================================================================


class TestInMemoryRepositories:
    """Tests for in-memory repositories."""

    def test_holding_upsert_replaces_account(self):
        repo = InMemoryHoldingRepository()
        repo.upsert("PKO", make_holding("acc", "10", "100"))
        repo.upsert("pko", make_holding("acc", "15", "110"))

        [holding] = repo.list_holdings("PKO")

        assert holding.quantity == qty("15")

    def test_delete_last_holding_drops_symbol(self):
        repo = InMemoryHoldingRepository()
        repo.upsert("PKO", make_holding("acc", "10", "100"))

        repo.delete("PKO", "acc")

        assert repo.list_symbols() == []
        assert repo.list_holdings("PKO") == []

    def test_purchases_sorted_by_date(self):
        repo = InMemoryTransactionRepository()
        repo.add(make_purchase("PKO", date(2023, 5, 1), "10"))
        repo.add(make_purchase("PKO", date(2023, 1, 1), "20"))

        dates = [p.trade_date for p in repo.list_purchases("PKO")]

        assert dates == [date(2023, 1, 1), date(2023, 5, 1)]
