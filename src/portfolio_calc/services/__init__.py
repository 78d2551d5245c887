"""Service layer - calculation engine and orchestration."""

from portfolio_calc.services.aggregation import (
    AggregateResult,
    aggregate,
    aggregate_positions,
    build_position,
    remove_holding,
    replace_holding,
)
from portfolio_calc.services.valuation import (
    profit_loss_percentage,
    valuate_portfolio,
    valuate_position,
    valuate_statement,
    valuate_statement_value,
    valuate_unit_priced,
)
from portfolio_calc.services.xirr import (
    XirrSolver,
    portfolio_cash_flows,
    position_cash_flows,
)
from portfolio_calc.services.reconciliation import (
    build_report,
    reconcile,
    summarize,
    value_discrepancy_percentage,
)
from portfolio_calc.services.portfolio_service import PortfolioService
from portfolio_calc.services.reconciliation_service import ReconciliationService

__all__ = [
    "AggregateResult",
    "aggregate",
    "aggregate_positions",
    "build_position",
    "remove_holding",
    "replace_holding",
    "profit_loss_percentage",
    "valuate_portfolio",
    "valuate_position",
    "valuate_statement",
    "valuate_statement_value",
    "valuate_unit_priced",
    "XirrSolver",
    "portfolio_cash_flows",
    "position_cash_flows",
    "build_report",
    "reconcile",
    "summarize",
    "value_discrepancy_percentage",
    "PortfolioService",
    "ReconciliationService",
]
