# portfolio_timeline/schemas/valuation.py
"""
Pydantic schemas for the valuation boundary.

These schemas handle:
- Raw trade records from static lists or loaders (input)
- Daily snapshots with per-day trade markers (chart data)
- Header summary and full history (output)
"""

import datetime as dt
import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from portfolio_timeline.schemas.validators import validate_date_key, validate_trade_action
from portfolio_timeline.services.valuation.types import (
    TimeRange,
    TradeAction,
    TradeEvent,
    ValuationHistory,
)

logger = logging.getLogger(__name__)


# =============================================================================
# TRADE INPUT SCHEMAS
# =============================================================================

class TradeEventCreate(BaseModel):
    """
    A raw trade record.

    Accepts the dashboard's static list format:
        {"action": "B", "date": "2023-01-03", "positionAveragePrice": None,
         "price": 85.31, "quantity": 3}
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    action: TradeAction = Field(
        ...,
        description="BUY or SELL (short codes B/S accepted)"
    )
    date: dt.date = Field(
        ...,
        description="Trading day (YYYY-MM-DD or epoch seconds)"
    )
    price: Decimal = Field(
        ...,
        gt=0,
        description="Execution price per unit"
    )
    quantity: int = Field(
        ...,
        gt=0,
        description="Units traded"
    )
    reference_cost_basis: Decimal | None = Field(
        default=None,
        alias="positionAveragePrice",
        description="Average cost at the time of a sale (display only)"
    )

    @field_validator("action", mode="before")
    @classmethod
    def normalize_action(cls, v: Any) -> TradeAction:
        """Map B/S/BUY/SELL to TradeAction."""
        return validate_trade_action(v)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> dt.date:
        """Accept ISO strings and epoch timestamps."""
        return validate_date_key(v)

    def to_domain(self) -> TradeEvent:
        """Convert to the engine's TradeEvent."""
        return TradeEvent(
            action=self.action,
            date=self.date,
            price=self.price,
            quantity=self.quantity,
            reference_cost_basis=self.reference_cost_basis,
        )


def parse_trade_records(
        records: Iterable[Mapping[str, Any]],
) -> tuple[list[TradeEvent], list[str]]:
    """
    Validate a batch of raw trade records.

    Invalid records are skipped with a logged warning rather than failing
    the whole batch.

    Args:
        records: Raw dictionaries (e.g. a static trade list)

    Returns:
        (valid trades in input order, one warning per skipped record)
    """
    trades: list[TradeEvent] = []
    warnings: list[str] = []

    for index, record in enumerate(records):
        try:
            trades.append(TradeEventCreate.model_validate(record).to_domain())
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) or "record" for err in e.errors()
            )
            message = f"Skipping trade record {index}: invalid {fields}"
            logger.warning(message, extra={"record_index": index})
            warnings.append(message)

    return trades, warnings


# =============================================================================
# SNAPSHOT SCHEMAS
# =============================================================================

class TradeMarker(BaseModel):
    """Trade annotation drawn on the chart for a day."""

    model_config = ConfigDict(from_attributes=True)

    action: TradeAction
    price: Decimal
    quantity: int
    reference_cost_basis: Decimal | None = None


class DailySnapshotResponse(BaseModel):
    """A single day of the chart series."""

    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    price: Decimal = Field(..., description="Instrument price used for this day")
    shares_owned: int = Field(..., description="Position after the day's trades")
    cost_basis: Decimal = Field(..., description="Capital attributed to open shares")
    market_value: Decimal = Field(..., description="shares_owned × price")
    unrealized_gain_loss: Decimal = Field(..., description="market_value - cost_basis")
    applied_trade: TradeMarker | None = Field(
        default=None,
        description="Last trade applied on this day (chart marker)"
    )
    applied_trades: list[TradeMarker] = Field(
        default_factory=list,
        description="All trades applied on this day, in application order"
    )
    has_complete_data: bool = Field(
        default=True,
        description="False if this day could not be computed and was zero-filled"
    )


# =============================================================================
# SUMMARY / HISTORY SCHEMAS
# =============================================================================

class ValuationSummaryResponse(BaseModel):
    """Header numbers shown above the chart."""

    model_config = ConfigDict(from_attributes=True)

    current_value: Decimal = Field(..., description="Market value on the last day")
    cost_basis: Decimal = Field(..., description="Cost basis of open shares on the last day")
    unrealized_gain_loss: Decimal = Field(..., description="current_value - cost_basis")
    gain_loss_percentage: Decimal = Field(
        ...,
        description="Unrealized P&L as percentage of cost basis"
    )
    total_invested: Decimal = Field(..., description="BUY notionals minus SELL notionals")
    is_profit: bool
    as_of: dt.date | None = None
    has_data: bool = Field(
        default=True,
        description="False means the series is not loaded yet"
    )


class ValuationHistoryResponse(BaseModel):
    """Windowed chart series plus summary."""

    model_config = ConfigDict(from_attributes=True)

    time_range: TimeRange = Field(..., description="Applied window (1D, 1M, 1Y, MAX)")
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    total_points: int
    full_points: int = Field(..., description="Length of the unfiltered series")
    data: list[DailySnapshotResponse]
    summary: ValuationSummaryResponse
    warnings: list[str] = Field(default_factory=list)
    aborted: bool = False

    @classmethod
    def from_history(cls, history: ValuationHistory) -> "ValuationHistoryResponse":
        return cls.model_validate(history)
