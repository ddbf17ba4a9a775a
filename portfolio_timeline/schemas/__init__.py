# portfolio_timeline/schemas/__init__.py
"""
Pydantic schemas for the in-process boundary with loaders and renderers.

Usage:
    from portfolio_timeline.schemas import parse_trade_records, ValuationHistoryResponse
"""

from portfolio_timeline.schemas.valuation import (
    DailySnapshotResponse,
    TradeEventCreate,
    TradeMarker,
    ValuationHistoryResponse,
    ValuationSummaryResponse,
    parse_trade_records,
)

__all__ = [
    "TradeEventCreate",
    "parse_trade_records",
    "TradeMarker",
    "DailySnapshotResponse",
    "ValuationSummaryResponse",
    "ValuationHistoryResponse",
]
