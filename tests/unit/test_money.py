"""
Unit tests for Money and Quantity value types.

Tests cover:
- Construction, scale and half-even rounding
- Same-currency arithmetic and currency mismatch rejection
- Explicit rounding on division
- Quantity positivity invariant
"""

from decimal import Decimal, ROUND_HALF_UP

import pytest

from portfolio_calc.core.exceptions import CurrencyMismatchError, InvalidInputError
from portfolio_calc.domain.models import Money, Quantity

from tests.conftest import pln, qty


# =============================================================================
# MONEY CONSTRUCTION
# =============================================================================


class TestMoneyConstruction:
    """Tests for Money invariants at construction."""

    def test_amount_held_at_four_places(self):
        money = Money(Decimal("12.5"), "PLN")

        assert money.amount == Decimal("12.5000")
        assert money.amount.as_tuple().exponent == -4

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1.00005", Decimal("1.0000")),  # tie -> even
            ("1.00015", Decimal("1.0002")),  # tie -> even
            ("1.00016", Decimal("1.0002")),
            ("-2.00025", Decimal("-2.0002")),
        ],
    )
    def test_rounds_half_even_to_scale(self, raw: str, expected: Decimal):
        assert Money(Decimal(raw), "PLN").amount == expected

    def test_currency_is_normalized(self):
        assert Money(Decimal("1"), " pln ").currency == "PLN"

    @pytest.mark.parametrize("currency", ["", "PL", "ZLOTY", "12X"])
    def test_invalid_currency_rejected(self, currency: str):
        with pytest.raises(InvalidInputError):
            Money(Decimal("1"), currency)

    def test_float_amount_rejected(self):
        with pytest.raises(InvalidInputError):
            Money(0.1, "PLN")

    @pytest.mark.parametrize("raw", ["abc", "NaN", "Infinity"])
    def test_non_finite_amount_rejected(self, raw: str):
        with pytest.raises(InvalidInputError):
            Money(raw, "PLN")

    def test_string_and_int_amounts_accepted(self):
        assert Money("10.25", "PLN") == Money(Decimal("10.25"), "PLN")
        assert Money(7, "PLN").amount == Decimal("7")

    def test_zero_factory(self):
        zero = Money.zero("EUR")

        assert zero.is_zero
        assert zero.currency == "EUR"


# =============================================================================
# MONEY ARITHMETIC
# =============================================================================


class TestMoneyArithmetic:
    """Tests for exact same-currency arithmetic."""

    @pytest.mark.parametrize(
        "a, b",
        [
            ("100.00", "0.0001"),
            ("-15.5", "1234567.8912"),
            ("0", "0"),
            ("99999999999.9999", "0.0001"),
        ],
    )
    def test_add_then_subtract_returns_original(self, a: str, b: str):
        left, right = pln(a), pln(b)

        assert left.add(right).subtract(right) == left

    def test_operators_match_methods(self):
        a, b = pln("10.10"), pln("2.05")

        assert a + b == a.add(b) == pln("12.15")
        assert a - b == a.subtract(b) == pln("8.05")
        assert -a == pln("-10.10")

    def test_add_different_currency_raises(self):
        with pytest.raises(CurrencyMismatchError):
            pln("1").add(Money(Decimal("1"), "EUR"))

    def test_subtract_different_currency_raises(self):
        with pytest.raises(CurrencyMismatchError):
            pln("1") - Money(Decimal("1"), "USD")

    def test_multiply_by_quantity(self):
        """
        GIVEN a unit cost of 1200.1234 and 0.5 units
        WHEN multiplied
        THEN result is rounded once to money scale
        """
        assert pln("1200.1234").multiply(qty("0.5")) == pln("600.0617")

    def test_multiply_by_fractional_quantity_rounds_half_even(self):
        # 0.0001 * 0.5 = 0.00005 -> 0.0000
        assert pln("0.0001").multiply(Decimal("0.5")) == pln("0")

    def test_divide_default_half_even(self):
        assert pln("10").divide(3) == pln("3.3333")
        assert pln("0.0001").divide(2) == pln("0")

    def test_divide_with_explicit_rounding(self):
        assert pln("0.0001").divide(2, rounding=ROUND_HALF_UP) == pln("0.0001")

    def test_divide_by_zero_raises(self):
        with pytest.raises(InvalidInputError):
            pln("10").divide(0)

    def test_comparisons(self):
        assert pln("1") < pln("2")
        assert pln("2") >= pln("2")
        with pytest.raises(CurrencyMismatchError):
            _ = pln("1") < Money(Decimal("2"), "EUR")

    def test_sign_helpers(self):
        assert pln("-1").is_negative
        assert pln("1").is_positive
        assert pln("-3.5").abs() == pln("3.5")

    def test_money_is_immutable(self):
        money = pln("1")
        with pytest.raises(AttributeError):
            money.amount = Decimal("2")


# =============================================================================
# QUANTITY
# =============================================================================


class TestQuantity:
    """Tests for Quantity invariants."""

    def test_held_at_eight_places(self):
        quantity = Quantity(Decimal("0.123456789"))

        assert quantity.value == Decimal("0.12345679")

    @pytest.mark.parametrize("raw", ["0", "-1", "-0.00000001", "0.000000001"])
    def test_non_positive_rejected(self, raw: str):
        with pytest.raises(InvalidInputError):
            Quantity(Decimal(raw))

    def test_addition(self):
        assert qty("50") + qty("30.5") == qty("80.5")

    def test_ordering(self):
        assert qty("1") < qty("1.00000001")

    def test_str_is_plain(self):
        assert str(qty("80")) == "80"
        assert str(qty("0.5")) == "0.5"
