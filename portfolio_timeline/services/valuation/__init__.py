# portfolio_timeline/services/valuation/__init__.py
"""
Valuation Service Package.

This package turns a list of buy/sell trades for one instrument into a
chart-ready daily series:
- Daily snapshots (ValuationEngine.compute)
- Trailing windows for the range buttons (filter_snapshots)
- Header numbers (summarize)

Usage:
    from portfolio_timeline.services.valuation import ValuationService

    service = ValuationService()
    history = service.get_history(trades, time_range="1Y")

Architecture:
    valuation/
    ├── __init__.py          # This file - package exports
    ├── types.py             # Internal data classes
    ├── engine.py            # Daily snapshot fold
    ├── range_filter.py      # Trailing window trim
    ├── summary.py           # Header statistics
    └── service.py           # ValuationService (orchestrator)

Data Flow:
    TradeEvents (+ prices) → ValuationEngine → DailySnapshots
    DailySnapshots → filter_snapshots → windowed DailySnapshots
    DailySnapshots + TradeEvents → summarize → PortfolioSummary
"""

from portfolio_timeline.services.valuation.engine import ValuationEngine, compute
from portfolio_timeline.services.valuation.range_filter import filter_snapshots, window_start
from portfolio_timeline.services.valuation.service import ValuationService
from portfolio_timeline.services.valuation.summary import (
    gain_loss_percentage,
    summarize,
    total_invested,
)
from portfolio_timeline.services.valuation.types import (
    DailySnapshot,
    DayFault,
    DayResult,
    FaultKind,
    FaultPolicy,
    PortfolioSummary,
    TimeRange,
    TradeAction,
    TradeEvent,
    ValuationHistory,
    ValuationResult,
    ValuationState,
)

__all__ = [
    # Main service
    "ValuationService",

    # Pure steps
    "ValuationEngine",
    "compute",
    "filter_snapshots",
    "window_start",
    "summarize",
    "total_invested",
    "gain_loss_percentage",

    # Data types
    "TradeAction",
    "TradeEvent",
    "TimeRange",
    "FaultPolicy",
    "FaultKind",
    "ValuationState",
    "DailySnapshot",
    "DayFault",
    "DayResult",
    "ValuationResult",
    "PortfolioSummary",
    "ValuationHistory",
]
