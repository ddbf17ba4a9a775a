# portfolio_timeline/services/valuation/service.py
"""
Valuation Service - entry point for chart data.

Composes the three pure steps the dashboard needs:
    trades (+ prices) -> ValuationEngine -> full series
    full series       -> filter_snapshots(time_range) -> window
    full series       -> summarize() -> header numbers

Design Principles:
- Dependency Injection: engine and settings injected via constructor
- Single Entry Point: the UI layer only talks to this service
- No rendering knowledge: returns domain objects; schemas/valuation.py
  converts them for serialization

Usage:
    from portfolio_timeline.services.valuation import ValuationService

    service = ValuationService()
    history = service.get_history(trades, time_range="1M")
    history.summary.current_value
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from portfolio_timeline.config import Settings, settings as default_settings
from portfolio_timeline.services.valuation.engine import PriceFeed, ValuationEngine
from portfolio_timeline.services.valuation.range_filter import filter_snapshots
from portfolio_timeline.services.valuation.summary import summarize
from portfolio_timeline.services.valuation.types import (
    TimeRange,
    TradeEvent,
    ValuationHistory,
)
from portfolio_timeline.utils.context import correlation_scope

logger = logging.getLogger(__name__)


class ValuationService:
    """
    Main service for chart-ready portfolio history.

    Attributes:
        _settings: Library settings (fault policy, default window)
        _engine: Valuation engine used for every call
    """

    def __init__(
            self,
            engine: ValuationEngine | None = None,
            settings: Settings | None = None,
    ) -> None:
        """
        Initialize the valuation service.

        Args:
            engine: Engine to use. If None, one is built with the
                    configured fault policy.
            settings: Settings override (defaults to the module settings)
        """
        self._settings = settings or default_settings
        self._engine = engine or ValuationEngine(self._settings.fault_policy)

    @property
    def engine(self) -> ValuationEngine:
        return self._engine

    def get_history(
            self,
            trades: Iterable[TradeEvent],
            prices: PriceFeed | None = None,
            time_range: TimeRange | str | None = None,
            correlation_id: str | None = None,
    ) -> ValuationHistory:
        """
        Compute the series, apply the chart window and summarize.

        Args:
            trades: Trade events in any order
            prices: Optional closing prices keyed by date/ISO string/epoch
            time_range: Window member or code; defaults to settings
            correlation_id: Tag for this run's log lines (generated if omitted)

        Returns:
            ValuationHistory with the windowed series and full-series summary

        Raises:
            InvalidTimeRangeError: If the window code is unknown
        """
        window = TimeRange.parse(time_range or self._settings.default_time_range)
        trade_list = list(trades)

        with correlation_scope(correlation_id):
            result = self._engine.run(trade_list, prices)
            data = filter_snapshots(result.snapshots, window)
            summary = summarize(result.snapshots, trade_list)

            logger.info(
                f"History computed: {len(trade_list)} trades, "
                f"{result.total_points} days, {len(data)} in window {window.value}",
                extra={"fault_count": len(result.faults), "aborted": result.aborted},
            )

        warnings = list(result.warnings)
        incomplete = result.total_points - result.complete_points
        if incomplete > 0:
            warnings.append(
                f"{incomplete} of {result.total_points} data points have incomplete data"
            )

        return ValuationHistory(
            time_range=window,
            data=data,
            summary=summary,
            full_points=result.total_points,
            faults=result.faults,
            warnings=warnings,
            aborted=result.aborted,
        )
