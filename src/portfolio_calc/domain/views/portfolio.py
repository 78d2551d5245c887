"""View models for valuation, return and portfolio outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Optional

from portfolio_calc.domain.models import Instrument, Money, Position

PERCENT_DISPLAY_EXP = Decimal("0.01")


def round_percentage(value: Decimal) -> Decimal:
    """Round a full-precision percentage to two places for display."""
    return value.quantize(PERCENT_DISPLAY_EXP, rounding=ROUND_HALF_EVEN)


@dataclass(frozen=True)
class Valuation:
    """
    Invested amount, current value and profit/loss for one position.

    profit_loss_percentage keeps full precision so portfolio roll-ups do not
    compound rounding; use profit_loss_percentage_display for presentation.
    """

    invested: Money
    current_value: Money
    profit_loss: Money
    profit_loss_percentage: Decimal

    @property
    def profit_loss_percentage_display(self) -> Decimal:
        return round_percentage(self.profit_loss_percentage)


@dataclass(frozen=True)
class PortfolioValuation:
    """Additive roll-up of position valuations."""

    total_invested: Money
    total_current_value: Money
    total_profit_loss: Money
    total_profit_loss_percentage: Decimal
    positions_count: int = 0

    @property
    def total_profit_loss_percentage_display(self) -> Decimal:
        return round_percentage(self.total_profit_loss_percentage)


@dataclass(frozen=True)
class XirrResult:
    """Annualized internal rate of return for a set of cash flows."""

    rate: Decimal
    iterations: int
    as_of: date

    @property
    def percentage(self) -> Decimal:
        """Rate as a percentage rounded for display (0.1 -> 10.00)."""
        return round_percentage(self.rate * 100)


@dataclass
class PositionSummary:
    """
    Position enriched with valuation and XIRR.

    Missing prices or an unsolvable XIRR leave the matching field None and
    record why in the *_error field instead of failing the whole summary.
    """

    symbol: str
    position: Position
    instrument: Optional[Instrument] = None
    valuation: Optional[Valuation] = None
    valuation_error: Optional[str] = None
    xirr: Optional[XirrResult] = None
    xirr_error: Optional[str] = None

    @property
    def has_gaps(self) -> bool:
        return self.valuation is None or self.xirr is None


@dataclass
class PortfolioSummary:
    """Portfolio totals, per-position summaries and portfolio-level XIRR."""

    valuation: PortfolioValuation
    as_of: date
    positions: list[PositionSummary] = field(default_factory=list)
    xirr: Optional[XirrResult] = None
    xirr_error: Optional[str] = None
    is_partial: bool = False
    message: Optional[str] = None

    @property
    def positions_count(self) -> int:
        return len(self.positions)

    @property
    def unvalued_symbols(self) -> list[str]:
        return [p.symbol for p in self.positions if p.valuation is None]
