# portfolio_timeline/__init__.py
"""
Portfolio Timeline.

Turns a sparse list of buy/sell trades for one instrument into a gap-filled
daily valuation series for dashboard charts, with trailing-window filtering
and header summary statistics.

Usage:
    from portfolio_timeline import ValuationService, parse_trade_records

    trades, warnings = parse_trade_records(raw_records)
    history = ValuationService().get_history(trades, time_range="1M")
"""

from portfolio_timeline.schemas.valuation import parse_trade_records
from portfolio_timeline.services.valuation import (
    DailySnapshot,
    FaultPolicy,
    PortfolioSummary,
    TimeRange,
    TradeAction,
    TradeEvent,
    ValuationEngine,
    ValuationHistory,
    ValuationService,
    compute,
    filter_snapshots,
    summarize,
)

__version__ = "0.1.0"

__all__ = [
    "ValuationService",
    "ValuationEngine",
    "compute",
    "filter_snapshots",
    "summarize",
    "parse_trade_records",
    "TradeAction",
    "TradeEvent",
    "TimeRange",
    "FaultPolicy",
    "DailySnapshot",
    "PortfolioSummary",
    "ValuationHistory",
]
