"""Exact decimal value types: Money and Quantity."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, localcontext
from functools import total_ordering
from typing import Union

from portfolio_calc.core.exceptions import (
    CurrencyMismatchError,
    InvalidInputError,
)

MONEY_SCALE = 4
QUANTITY_SCALE = 8

# Working precision for intermediate products (money scale + quantity scale
# leaves plenty of headroom at 50 significant digits)
CALC_PRECISION = 50

_MONEY_EXP = Decimal(1).scaleb(-MONEY_SCALE)
_QUANTITY_EXP = Decimal(1).scaleb(-QUANTITY_SCALE)

Numeric = Union[Decimal, int, str]


def to_decimal(value: Numeric, what: str = "value") -> Decimal:
    """
    Convert an exact numeric input to a finite Decimal.

    Binary floats are rejected; pass a string or Decimal instead.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidInputError(f"{what} must be exact (Decimal, int or str), got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(f"{what} is not a number: {value!r}") from None
    if not result.is_finite():
        raise InvalidInputError(f"{what} must be finite, got {value!r}")
    return result


def quantize_money(value: Decimal, rounding: str = ROUND_HALF_EVEN) -> Decimal:
    """Round a raw amount to money scale."""
    with localcontext() as ctx:
        ctx.prec = CALC_PRECISION
        return value.quantize(_MONEY_EXP, rounding=rounding)


@total_ordering
@dataclass(frozen=True)
class Money:
    """
    Exact monetary amount tied to a 3-letter currency code.

    Amounts are held at MONEY_SCALE fractional digits so intermediate
    results keep more precision than a 2-decimal display currency.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        amount = to_decimal(self.amount, "amount")
        if not isinstance(self.currency, str):
            raise InvalidInputError(f"currency must be a string, got {self.currency!r}")
        currency = self.currency.strip().upper()
        if len(currency) != 3 or not currency.isalpha():
            raise InvalidInputError(f"currency must be a 3-letter code, got {self.currency!r}")
        object.__setattr__(self, "amount", quantize_money(amount))
        object.__setattr__(self, "currency", currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(Decimal("0"), currency)

    def _check_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Expected Money, got {type(other).__name__}")
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def add(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: Union[Numeric, "Quantity"]) -> "Money":
        """Scale by an exact factor, rounding half-even to money scale."""
        if isinstance(factor, Quantity):
            factor = factor.value
        factor = to_decimal(factor, "factor")
        with localcontext() as ctx:
            ctx.prec = CALC_PRECISION
            product = self.amount * factor
        return Money(product, self.currency)

    def divide(
        self,
        divisor: Union[Numeric, "Quantity"],
        rounding: str = ROUND_HALF_EVEN,
    ) -> "Money":
        """Divide by an exact scalar; the rounding rule is always explicit."""
        if isinstance(divisor, Quantity):
            divisor = divisor.value
        divisor = to_decimal(divisor, "divisor")
        if divisor == 0:
            raise InvalidInputError("Cannot divide money by zero")
        with localcontext() as ctx:
            ctx.prec = CALC_PRECISION
            quotient = self.amount / divisor
        return Money(quantize_money(quotient, rounding=rounding), self.currency)

    def abs(self) -> "Money":
        return Money(abs(self.amount), self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __neg__(self) -> "Money":
        return Money(-self.amount, self.currency)

    def __lt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.amount < other.amount

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


@total_ordering
@dataclass(frozen=True)
class Quantity:
    """
    Strictly positive count of units, held at QUANTITY_SCALE digits.

    A zero or negative quantity is a construction error, never a state.
    """

    value: Decimal

    def __post_init__(self) -> None:
        value = to_decimal(self.value, "quantity")
        with localcontext() as ctx:
            ctx.prec = CALC_PRECISION
            value = value.quantize(_QUANTITY_EXP, rounding=ROUND_HALF_EVEN)
        if value <= 0:
            raise InvalidInputError(f"Quantity must be greater than zero, got {self.value}")
        object.__setattr__(self, "value", value)

    def __add__(self, other: "Quantity") -> "Quantity":
        if not isinstance(other, Quantity):
            return NotImplemented
        return Quantity(self.value + other.value)

    def __lt__(self, other: "Quantity") -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value < other.value

    def __str__(self) -> str:
        return format(self.value.normalize(), "f")
