"""Tolerance-based comparison of two position snapshots."""

from collections import Counter
from datetime import datetime
from decimal import Decimal, localcontext
from typing import Iterable, Mapping, Optional, Sequence, Union

from portfolio_calc.core.exceptions import InvalidInputError
from portfolio_calc.domain.models import Money, PositionSnapshot, ReconciliationStatus
from portfolio_calc.domain.models.money import CALC_PRECISION, to_decimal
from portfolio_calc.domain.views import (
    ReconciliationEntry,
    ReconciliationReport,
    ReconciliationSummary,
)

_HUNDRED = Decimal("100")

Tolerance = Union[Decimal, int, str]


def value_discrepancy_percentage(system_value: Money, source_value: Money) -> Decimal:
    """
    Return |system - source| / source × 100.

    A zero source value is a 100% mismatch unless the system side is also zero.
    """
    difference = (system_value - source_value).abs()
    if source_value.is_zero:
        return Decimal("0") if difference.is_zero else _HUNDRED
    with localcontext() as ctx:
        ctx.prec = CALC_PRECISION
        return difference.amount / source_value.amount * _HUNDRED


def _index(snapshots: Iterable[PositionSnapshot], side: str) -> Mapping[str, PositionSnapshot]:
    snapshots = list(snapshots)
    counts = Counter(s.symbol for s in snapshots)
    duplicates = sorted(symbol for symbol, count in counts.items() if count > 1)
    if duplicates:
        raise InvalidInputError(
            f"Duplicate symbols in {side} snapshot: {', '.join(duplicates)}"
        )
    return {s.symbol: s for s in snapshots}


def _compare(
    system: PositionSnapshot,
    source: PositionSnapshot,
    quantity_tolerance: Decimal,
    value_tolerance_percent: Decimal,
) -> ReconciliationEntry:
    quantity_difference = system.quantity.value - source.quantity.value
    value_difference = system.value - source.value
    discrepancy = value_discrepancy_percentage(system.value, source.value)

    # Quantity takes precedence over value
    if abs(quantity_difference) > quantity_tolerance:
        status = ReconciliationStatus.QUANTITY_MISMATCH
    elif discrepancy <= value_tolerance_percent:
        status = ReconciliationStatus.MATCHED
    else:
        status = ReconciliationStatus.VALUE_MISMATCH

    return ReconciliationEntry(
        symbol=system.symbol,
        status=status,
        system_quantity=system.quantity,
        system_value=system.value,
        source_quantity=source.quantity,
        source_value=source.value,
        quantity_difference=quantity_difference,
        value_difference=value_difference,
        discrepancy_percentage=discrepancy,
    )


def reconcile(
    system_positions: Iterable[PositionSnapshot],
    source_positions: Iterable[PositionSnapshot],
    quantity_tolerance_abs: Tolerance = Decimal("0"),
    value_tolerance_percent: Tolerance = Decimal("1.0"),
) -> list[ReconciliationEntry]:
    """
    Classify every instrument present on either side.

    Only in system -> MISSING_IN_SOURCE; only in source -> MISSING_IN_SYSTEM;
    in both -> QUANTITY_MISMATCH, MATCHED or VALUE_MISMATCH. Entries are
    sorted by symbol so output does not depend on input order. Inputs are
    only read.
    """
    quantity_tolerance = to_decimal(quantity_tolerance_abs, "quantity tolerance")
    value_tolerance = to_decimal(value_tolerance_percent, "value tolerance")
    if quantity_tolerance < 0 or value_tolerance < 0:
        raise InvalidInputError("Reconciliation tolerances cannot be negative")

    system_map = _index(system_positions, "system")
    source_map = _index(source_positions, "source")

    entries: list[ReconciliationEntry] = []
    for symbol in sorted(set(system_map) | set(source_map)):
        system = system_map.get(symbol)
        source = source_map.get(symbol)
        if source is None:
            entries.append(
                ReconciliationEntry(
                    symbol=symbol,
                    status=ReconciliationStatus.MISSING_IN_SOURCE,
                    system_quantity=system.quantity,
                    system_value=system.value,
                    discrepancy_percentage=_HUNDRED,
                )
            )
        elif system is None:
            entries.append(
                ReconciliationEntry(
                    symbol=symbol,
                    status=ReconciliationStatus.MISSING_IN_SYSTEM,
                    source_quantity=source.quantity,
                    source_value=source.value,
                    discrepancy_percentage=_HUNDRED,
                )
            )
        else:
            entries.append(_compare(system, source, quantity_tolerance, value_tolerance))
    return entries


def summarize(entries: Sequence[ReconciliationEntry]) -> ReconciliationSummary:
    """Count entries per classification."""
    counts = Counter(entry.status for entry in entries)
    return ReconciliationSummary(
        total=len(entries),
        matched=counts[ReconciliationStatus.MATCHED],
        quantity_mismatches=counts[ReconciliationStatus.QUANTITY_MISMATCH],
        value_mismatches=counts[ReconciliationStatus.VALUE_MISMATCH],
        missing_in_system=counts[ReconciliationStatus.MISSING_IN_SYSTEM],
        missing_in_source=counts[ReconciliationStatus.MISSING_IN_SOURCE],
    )


def build_report(
    system_positions: Iterable[PositionSnapshot],
    source_positions: Iterable[PositionSnapshot],
    quantity_tolerance_abs: Tolerance = Decimal("0"),
    value_tolerance_percent: Tolerance = Decimal("1.0"),
    generated_at: Optional[datetime] = None,
) -> ReconciliationReport:
    """Run reconcile and bundle entries with a summary and the tolerances used."""
    entries = reconcile(
        system_positions,
        source_positions,
        quantity_tolerance_abs=quantity_tolerance_abs,
        value_tolerance_percent=value_tolerance_percent,
    )
    return ReconciliationReport(
        entries=tuple(entries),
        summary=summarize(entries),
        quantity_tolerance=to_decimal(quantity_tolerance_abs, "quantity tolerance"),
        value_tolerance_percent=to_decimal(value_tolerance_percent, "value tolerance"),
        generated_at=generated_at,
    )
