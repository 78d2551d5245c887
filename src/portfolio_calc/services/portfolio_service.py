"""Portfolio service: positions, valuations and returns over injected sources."""

import logging
from datetime import date
from typing import Optional, Union

from portfolio_calc.config.settings import Settings, get_settings
from portfolio_calc.core.exceptions import (
    DataUnavailableError,
    NotFoundError,
    PriceUnavailableError,
    XirrNotComputableError,
)
from portfolio_calc.core.timezone import DateLike, to_calendar_date, today_market
from portfolio_calc.domain.models import (
    Instrument,
    Position,
    PositionSnapshot,
    PricingModel,
    Purchase,
)
from portfolio_calc.domain.views import (
    PortfolioSummary,
    PositionSummary,
    Valuation,
)
from portfolio_calc.providers.price_provider import PriceProvider, StatementProvider
from portfolio_calc.repositories.protocols import (
    HoldingRepository,
    InstrumentRepository,
    TransactionRepository,
)
from portfolio_calc.services.aggregation import build_position
from portfolio_calc.services.valuation import (
    valuate_portfolio,
    valuate_position,
    valuate_statement_value,
)
from portfolio_calc.services.xirr import (
    XirrSolver,
    portfolio_cash_flows,
    position_cash_flows,
)

logger = logging.getLogger(__name__)

ValuationOutcome = Union[Valuation, DataUnavailableError]


class PortfolioService:
    """
    Service for position and portfolio metrics.

    Loads holdings, prices and transaction history from its collaborators,
    then runs the pure engine. Missing data and unsolvable XIRR are reported
    as labeled gaps on the summaries instead of failing the whole request.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        instrument_repo: InstrumentRepository,
        transaction_repo: TransactionRepository,
        price_provider: PriceProvider,
        statement_provider: Optional[StatementProvider] = None,
        settings: Optional[Settings] = None,
        xirr_solver: Optional[XirrSolver] = None,
    ):
        self._holdings = holding_repo
        self._instruments = instrument_repo
        self._transactions = transaction_repo
        self._prices = price_provider
        self._statements = statement_provider
        self._settings = settings or get_settings()
        self._solver = xirr_solver or XirrSolver.from_settings(self._settings)

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def get_position(self, symbol: str) -> Position:
        """Aggregate all holdings of a symbol into its Position."""
        holdings = self._holdings.list_holdings(symbol)
        if not holdings:
            raise NotFoundError("Position", symbol)
        return build_position(symbol, holdings)

    def list_positions(self) -> list[Position]:
        """Aggregate every symbol with holdings, sorted by symbol."""
        return [self.get_position(symbol) for symbol in sorted(self._holdings.list_symbols())]

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------

    def position_summary(
        self,
        symbol: str,
        as_of: Optional[DateLike] = None,
    ) -> PositionSummary:
        """Valuation and XIRR for one position."""
        as_of_date = self._as_of(as_of)
        position = self.get_position(symbol)
        outcomes = self._valuate([position])
        return self._summarize(position, outcomes[position.symbol], as_of_date)

    def portfolio_summary(self, as_of: Optional[DateLike] = None) -> PortfolioSummary:
        """
        Portfolio totals, per-position summaries and portfolio XIRR.

        Totals are additive over positions that could be valued; when any
        position is missing a value the summary is flagged partial and the
        portfolio XIRR is not attempted. The portfolio XIRR is also skipped
        when any position has no transaction history.
        """
        as_of_date = self._as_of(as_of)
        positions = self.list_positions()
        currency = self._settings.base_currency

        if not positions:
            return PortfolioSummary(
                valuation=valuate_portfolio([], currency),
                as_of=as_of_date,
                message="No positions in portfolio",
            )

        outcomes = self._valuate(positions)
        summaries = [
            self._summarize(position, outcomes[position.symbol], as_of_date)
            for position in positions
        ]
        valuations = [s.valuation for s in summaries if s.valuation is not None]
        portfolio_valuation = valuate_portfolio(valuations, currency)
        is_partial = len(valuations) != len(summaries)

        summary = PortfolioSummary(
            valuation=portfolio_valuation,
            as_of=as_of_date,
            positions=summaries,
            is_partial=is_partial,
        )

        if is_partial:
            summary.xirr_error = (
                "Portfolio value incomplete; missing: "
                + ", ".join(summary.unvalued_symbols)
            )
            logger.warning("Portfolio summary is partial: %s", summary.xirr_error)
            return summary

        # Terminal value covers every position, so every position needs its purchases
        purchases: list[Purchase] = []
        without_history: list[str] = []
        for position in positions:
            position_purchases = self._transactions.list_purchases(position.symbol)
            if not position_purchases:
                without_history.append(position.symbol)
            purchases.extend(position_purchases)

        if without_history:
            summary.xirr_error = (
                "Transaction history incomplete; missing: " + ", ".join(without_history)
            )
            logger.warning("Portfolio XIRR not computable: %s", summary.xirr_error)
            return summary

        try:
            flows = portfolio_cash_flows(
                purchases, portfolio_valuation.total_current_value, as_of_date
            )
            summary.xirr = self._solver.solve(flows, as_of_date)
        except (DataUnavailableError, XirrNotComputableError) as exc:
            summary.xirr_error = exc.message
            logger.warning("Portfolio XIRR not computable: %s", exc.message)

        return summary

    def snapshots(self) -> list[PositionSnapshot]:
        """
        System-side snapshot of every position for reconciliation.

        Raises DataUnavailableError if any position cannot be valued.
        """
        positions = self.list_positions()
        outcomes = self._valuate(positions)
        result: list[PositionSnapshot] = []
        for position in positions:
            outcome = outcomes[position.symbol]
            if isinstance(outcome, DataUnavailableError):
                raise outcome
            result.append(
                PositionSnapshot(
                    symbol=position.symbol,
                    quantity=position.total_quantity,
                    value=outcome.current_value,
                )
            )
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _as_of(as_of: Optional[DateLike]) -> date:
        return to_calendar_date(as_of) if as_of is not None else today_market()

    def _pricing_model(self, symbol: str) -> PricingModel:
        instrument: Optional[Instrument] = self._instruments.get(symbol)
        if instrument is None:
            return PricingModel.UNIT_PRICE
        return instrument.pricing_model

    def _valuate(self, positions: list[Position]) -> dict[str, ValuationOutcome]:
        """Value each position, batching provider calls per pricing model."""
        unit_priced: list[Position] = []
        statement_valued: list[Position] = []
        for position in positions:
            if self._pricing_model(position.symbol) is PricingModel.STATEMENT:
                statement_valued.append(position)
            else:
                unit_priced.append(position)

        outcomes: dict[str, ValuationOutcome] = {}

        if unit_priced:
            prices = self._prices.get_prices([p.symbol for p in unit_priced])
            for position in unit_priced:
                try:
                    outcomes[position.symbol] = valuate_position(
                        position, prices.get(position.symbol)
                    )
                except PriceUnavailableError as exc:
                    outcomes[position.symbol] = exc

        if statement_valued:
            statements = (
                self._statements.get_statement_values([p.symbol for p in statement_valued])
                if self._statements is not None
                else {}
            )
            for position in statement_valued:
                statement = statements.get(position.symbol)
                if statement is None:
                    outcomes[position.symbol] = DataUnavailableError(
                        f"Statement value unavailable for {position.symbol}",
                        code="STATEMENT_UNAVAILABLE",
                    )
                else:
                    outcomes[position.symbol] = valuate_statement_value(statement)

        return outcomes

    def _summarize(
        self,
        position: Position,
        outcome: ValuationOutcome,
        as_of: date,
    ) -> PositionSummary:
        summary = PositionSummary(
            symbol=position.symbol,
            position=position,
            instrument=self._instruments.get(position.symbol),
        )

        if isinstance(outcome, DataUnavailableError):
            summary.valuation_error = outcome.message
            summary.xirr_error = "Current value unavailable"
            logger.warning("Position %s not valued: %s", position.symbol, outcome.message)
            return summary

        summary.valuation = outcome
        try:
            flows = position_cash_flows(
                self._transactions.list_purchases(position.symbol),
                outcome.current_value,
                as_of,
                symbol=position.symbol,
            )
            summary.xirr = self._solver.solve(flows, as_of)
        except (DataUnavailableError, XirrNotComputableError) as exc:
            summary.xirr_error = exc.message
            logger.warning("XIRR not computable for %s: %s", position.symbol, exc.message)

        return summary
