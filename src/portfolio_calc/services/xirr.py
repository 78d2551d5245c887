"""XIRR solver for irregularly dated cash flows."""

import logging
import math
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from portfolio_calc.config.settings import Settings, get_settings
from portfolio_calc.core.exceptions import (
    CurrencyMismatchError,
    DataUnavailableError,
    InvalidInputError,
    NoConvergenceError,
    NoSolutionError,
)
from portfolio_calc.core.timezone import DateLike, to_calendar_date
from portfolio_calc.domain.models import CashFlow, Money, Purchase
from portfolio_calc.domain.views import XirrResult

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.0

# Fixed ladder of candidate rates used to bracket a sign change in NPV.
# All values are > -1, where (1 + r) stays positive.
BRACKET_CANDIDATES: tuple[float, ...] = (
    -0.99, -0.9, -0.75, -0.5, -0.25, 0.0, 0.1, 0.25, 0.5,
    1.0, 2.0, 3.0, 5.0, 10.0, 25.0, 50.0, 100.0,
)

DERIVATIVE_EPSILON = 1e-12


class XirrSolver:
    """
    Annualized internal rate of return via bracketed Newton-Raphson.

    NPV(r) = Σ a_i / (1 + r)^(days_i / 365), with days counted from the
    earliest flow. A sign change is bracketed on a fixed candidate ladder,
    then refined with Newton steps, falling back to bisection whenever a
    step would leave the bracket or the derivative is near zero.
    """

    def __init__(
        self,
        tolerance: float = 1e-6,
        max_iterations: int = 100,
        initial_guess: float = 0.1,
    ):
        if tolerance <= 0:
            raise InvalidInputError("XIRR tolerance must be positive")
        if max_iterations < 1:
            raise InvalidInputError("XIRR max_iterations must be at least 1")
        if initial_guess <= -1:
            raise InvalidInputError("XIRR initial guess must be greater than -1")
        self._tolerance = tolerance
        self._max_iterations = max_iterations
        self._initial_guess = initial_guess

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "XirrSolver":
        settings = settings or get_settings()
        return cls(
            tolerance=settings.xirr_tolerance,
            max_iterations=settings.xirr_max_iterations,
            initial_guess=settings.xirr_initial_guess,
        )

    def solve(self, cash_flows: Iterable[CashFlow], as_of: DateLike) -> XirrResult:
        """
        Solve for the rate that makes NPV zero.

        Raises InvalidInputError for malformed input, NoSolutionError when no
        root can be bracketed and NoConvergenceError when refinement runs out
        of iterations.
        """
        as_of_date = to_calendar_date(as_of)
        flows = self._validate(list(cash_flows), as_of_date)
        times, amounts = self._normalize(flows)

        lo, hi = self._bracket(times, amounts)
        if lo == hi:
            rate, iterations = lo, 0
        else:
            rate, iterations = self._refine(times, amounts, lo, hi)

        logger.debug("XIRR converged to %.10f after %d iterations", rate, iterations)
        return XirrResult(
            rate=Decimal(f"{rate:.10f}"),
            iterations=iterations,
            as_of=as_of_date,
        )

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(flows: list[CashFlow], as_of: date) -> list[CashFlow]:
        if not flows:
            raise InvalidInputError("XIRR requires at least one cash flow")

        currency = flows[0].amount.currency
        for flow in flows:
            if flow.amount.currency != currency:
                raise CurrencyMismatchError(currency, flow.amount.currency)
            if flow.flow_date > as_of:
                raise InvalidInputError(
                    f"Cash flow on {flow.flow_date} is after valuation date {as_of}"
                )

        if len({flow.flow_date for flow in flows}) < 2:
            raise InvalidInputError("All cash flows share one date; rate is undefined")

        if not any(f.amount.is_positive for f in flows) or not any(
            f.amount.is_negative for f in flows
        ):
            raise NoSolutionError("Cash flows have no sign change")

        return sorted(flows, key=lambda f: f.flow_date)

    @staticmethod
    def _normalize(flows: Sequence[CashFlow]) -> tuple[list[float], list[float]]:
        """Return year fractions and amounts scaled so the largest magnitude is 1."""
        anchor = flows[0].flow_date
        scale = max(abs(f.amount.amount) for f in flows)
        times = [(f.flow_date - anchor).days / DAYS_PER_YEAR for f in flows]
        amounts = [float(f.amount.amount / scale) for f in flows]
        return times, amounts

    # ------------------------------------------------------------------
    # Numerics
    # ------------------------------------------------------------------

    @staticmethod
    def _npv(rate: float, times: Sequence[float], amounts: Sequence[float]) -> float:
        log_base = math.log1p(rate)
        return sum(a * math.exp(-t * log_base) for t, a in zip(times, amounts))

    @staticmethod
    def _npv_derivative(rate: float, times: Sequence[float], amounts: Sequence[float]) -> float:
        log_base = math.log1p(rate)
        return sum(
            -t * a * math.exp(-t * log_base) for t, a in zip(times, amounts)
        ) / (1.0 + rate)

    def _bracket(self, times: Sequence[float], amounts: Sequence[float]) -> tuple[float, float]:
        """
        Find the sign-change interval nearest the initial guess.

        Returns (r, r) when a candidate is already a root.
        """
        candidates = sorted(set(BRACKET_CANDIDATES) | {self._initial_guess})
        evaluated: list[tuple[float, float]] = []
        for rate in candidates:
            try:
                value = self._npv(rate, times, amounts)
            except OverflowError:
                continue
            if math.isfinite(value):
                evaluated.append((rate, value))

        brackets: list[tuple[float, float]] = []
        for rate, value in evaluated:
            if abs(value) < self._tolerance:
                brackets.append((rate, rate))
        for (r1, v1), (r2, v2) in zip(evaluated, evaluated[1:]):
            if (v1 < 0) != (v2 < 0) and abs(v1) >= self._tolerance and abs(v2) >= self._tolerance:
                brackets.append((r1, r2))

        if not brackets:
            raise NoSolutionError("No sign change in NPV across the candidate rates")

        guess = self._initial_guess

        def distance(interval: tuple[float, float]) -> float:
            lo, hi = interval
            if lo <= guess <= hi:
                return 0.0
            return min(abs(lo - guess), abs(hi - guess))

        return min(brackets, key=distance)

    def _refine(
        self,
        times: Sequence[float],
        amounts: Sequence[float],
        lo: float,
        hi: float,
    ) -> tuple[float, int]:
        f_lo = self._npv(lo, times, amounts)
        guess = self._initial_guess
        rate = guess if lo < guess < hi else (lo + hi) / 2.0

        for iteration in range(1, self._max_iterations + 1):
            value = self._npv(rate, times, amounts)
            if abs(value) < self._tolerance:
                return rate, iteration

            # Shrink the bracket around the sign change
            if (value < 0) == (f_lo < 0):
                lo, f_lo = rate, value
            else:
                hi = rate

            slope = self._npv_derivative(rate, times, amounts)
            next_rate = None
            if abs(slope) > DERIVATIVE_EPSILON:
                step = rate - value / slope
                if math.isfinite(step) and lo < step < hi:
                    next_rate = step
            rate = next_rate if next_rate is not None else (lo + hi) / 2.0

        logger.debug("XIRR refinement exhausted %d iterations", self._max_iterations)
        raise NoConvergenceError(self._max_iterations)


def _with_terminal_value(
    purchases: Iterable[Purchase],
    current_value: Money,
    as_of: DateLike,
    label: str,
) -> list[CashFlow]:
    flows = [purchase.to_cash_flow() for purchase in purchases]
    if not flows:
        raise DataUnavailableError(
            f"No transaction history for {label}",
            code="TRANSACTIONS_UNAVAILABLE",
        )
    flows.append(CashFlow.inflow(as_of, current_value))
    return flows


def position_cash_flows(
    purchases: Iterable[Purchase],
    current_value: Money,
    as_of: DateLike,
    symbol: str = "",
) -> list[CashFlow]:
    """Cash flows for one instrument: its buys plus current value on the as-of date."""
    purchases = list(purchases)
    label = symbol or (purchases[0].symbol if purchases else "position")
    return _with_terminal_value(purchases, current_value, as_of, label)


def portfolio_cash_flows(
    purchases: Iterable[Purchase],
    total_current_value: Money,
    as_of: DateLike,
) -> list[CashFlow]:
    """Cash flows for a portfolio: every position's buys plus one combined terminal value."""
    return _with_terminal_value(purchases, total_current_value, as_of, "portfolio")
