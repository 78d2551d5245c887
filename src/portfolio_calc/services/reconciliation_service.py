"""Reconciliation service comparing system positions with a broker statement."""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from portfolio_calc.config.settings import Settings, get_settings
from portfolio_calc.core.timezone import now_market
from portfolio_calc.domain.models import PositionSnapshot
from portfolio_calc.domain.views import ReconciliationReport
from portfolio_calc.services.portfolio_service import PortfolioService
from portfolio_calc.services.reconciliation import build_report

logger = logging.getLogger(__name__)


class ReconciliationService:
    """
    Service for reconciling the system portfolio against an external snapshot.

    Read-only: never mutates positions.
    """

    def __init__(
        self,
        portfolio_service: PortfolioService,
        settings: Optional[Settings] = None,
    ):
        self._portfolio = portfolio_service
        self._settings = settings or get_settings()

    def reconcile(
        self,
        source_snapshots: Iterable[PositionSnapshot],
        quantity_tolerance: Optional[Decimal] = None,
        value_tolerance_percent: Optional[Decimal] = None,
    ) -> ReconciliationReport:
        """
        Compare current system positions with a broker-side snapshot.

        Tolerances default to settings; pass explicit values per run when
        pricing staleness differs between sources.
        """
        if quantity_tolerance is None:
            quantity_tolerance = self._settings.reconciliation_quantity_tolerance
        if value_tolerance_percent is None:
            value_tolerance_percent = self._settings.reconciliation_value_tolerance_percent

        report = build_report(
            self._portfolio.snapshots(),
            source_snapshots,
            quantity_tolerance_abs=quantity_tolerance,
            value_tolerance_percent=value_tolerance_percent,
            generated_at=now_market(),
        )

        summary = report.summary
        if summary.has_issues:
            logger.warning(
                "Reconciliation found issues: %d quantity, %d value, "
                "%d missing in system, %d missing in source (of %d)",
                summary.quantity_mismatches,
                summary.value_mismatches,
                summary.missing_in_system,
                summary.missing_in_source,
                summary.total,
            )
        else:
            logger.info("Reconciliation matched all %d positions", summary.total)
        return report
