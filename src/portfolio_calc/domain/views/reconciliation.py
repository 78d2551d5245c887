"""View models for reconciliation output."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from portfolio_calc.domain.models import Money, Quantity, ReconciliationStatus


@dataclass(frozen=True)
class ReconciliationEntry:
    """
    One instrument's comparison outcome.

    Differences are system minus source. Produced fresh per run; never mutated.
    """

    symbol: str
    status: ReconciliationStatus
    system_quantity: Optional[Quantity] = None
    system_value: Optional[Money] = None
    source_quantity: Optional[Quantity] = None
    source_value: Optional[Money] = None
    quantity_difference: Optional[Decimal] = None
    value_difference: Optional[Money] = None
    discrepancy_percentage: Decimal = Decimal("0")

    @property
    def is_matched(self) -> bool:
        return self.status is ReconciliationStatus.MATCHED


@dataclass(frozen=True)
class ReconciliationSummary:
    """Counts per classification."""

    total: int
    matched: int
    quantity_mismatches: int
    value_mismatches: int
    missing_in_system: int
    missing_in_source: int

    @property
    def has_issues(self) -> bool:
        return self.matched != self.total


@dataclass(frozen=True)
class ReconciliationReport:
    """Entries of one reconciliation run plus the tolerances it used."""

    entries: tuple[ReconciliationEntry, ...]
    summary: ReconciliationSummary
    quantity_tolerance: Decimal
    value_tolerance_percent: Decimal
    generated_at: Optional[datetime] = None

    def iter_issues(self) -> Iterable[ReconciliationEntry]:
        yield from (e for e in self.entries if not e.is_matched)
