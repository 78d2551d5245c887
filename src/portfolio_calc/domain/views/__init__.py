"""View models for engine outputs."""

from portfolio_calc.domain.views.portfolio import (
    PositionSummary,
    PortfolioSummary,
    PortfolioValuation,
    Valuation,
    XirrResult,
    round_percentage,
)
from portfolio_calc.domain.views.reconciliation import (
    ReconciliationEntry,
    ReconciliationReport,
    ReconciliationSummary,
)

__all__ = [
    "PositionSummary",
    "PortfolioSummary",
    "PortfolioValuation",
    "Valuation",
    "XirrResult",
    "round_percentage",
    "ReconciliationEntry",
    "ReconciliationReport",
    "ReconciliationSummary",
]
