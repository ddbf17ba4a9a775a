# portfolio_timeline/services/valuation/types.py
"""
Internal data types for the Valuation package.

These dataclasses are used by the engine, the range filter and the summary.
They are NOT Pydantic schemas - those are defined in
portfolio_timeline/schemas/valuation.py for the outer boundary.

Design Principles:
- Immutable (frozen=True) for every value object
- Use Decimal for ALL money values (never float)
- Use date (not datetime) for snapshot dates
- Failures are values (DayFault), not exceptions, inside a run

Type Hierarchy:
    TradeEvent          - One buy/sell input record
    ValuationState      - Accumulator carried through the daily fold
    DailySnapshot       - One day's derived portfolio state
    DayFault            - Why a day (or an input entry) could not be used
    DayResult           - Snapshot or fault for one day
    ValuationResult     - Output of one engine run
    PortfolioSummary    - Headline numbers for the dashboard
    ValuationHistory    - Filtered series + summary returned by the service
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation

from portfolio_timeline.services.constants import BUY_CODES, SELL_CODES, ZERO
from portfolio_timeline.services.exceptions import (
    InvalidTimeRangeError,
    InvalidTradeError,
)
from portfolio_timeline.utils.date_utils import DateKey


# =============================================================================
# ENUMS
# =============================================================================

class TradeAction(str, enum.Enum):
    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def parse(cls, value: TradeAction | str) -> TradeAction:
        """Accept enum members, "BUY"/"SELL" and the short codes "B"/"S"."""
        if isinstance(value, TradeAction):
            return value
        code = str(value).strip().upper()
        if code in BUY_CODES:
            return cls.BUY
        if code in SELL_CODES:
            return cls.SELL
        raise InvalidTradeError(f"Invalid trade action: '{value}'. Use B/BUY or S/SELL", field="action")


class TimeRange(str, enum.Enum):
    """Trailing chart windows, keyed by the codes shown on the range buttons."""

    DAY = "1D"
    MONTH = "1M"
    YEAR = "1Y"
    ALL = "MAX"

    @classmethod
    def parse(cls, value: TimeRange | str) -> TimeRange:
        if isinstance(value, TimeRange):
            return value
        code = str(value).strip().upper()
        for member in cls:
            if code in (member.value, member.name):
                return member
        raise InvalidTimeRangeError(value)


class FaultPolicy(str, enum.Enum):
    """What the engine does when a day or an input entry cannot be used."""

    CONTINUE = "continue"
    ABORT = "abort"


class FaultKind(str, enum.Enum):
    MALFORMED_DATE = "malformed_date"
    MALFORMED_PRICE = "malformed_price"
    COMPUTATION = "computation"


# =============================================================================
# INPUT
# =============================================================================

@dataclass(frozen=True)
class TradeEvent:
    """
    A single buy or sell of the instrument.

    Attributes:
        action: BUY or SELL (short codes "B"/"S" are accepted)
        date: Trading day. Kept as supplied; ISO strings and epoch seconds
              are normalized by the engine, which skips unparseable ones.
        price: Execution price per unit (> 0)
        quantity: Units traded (positive integer)
        reference_cost_basis: Average cost at the time of a SELL, carried
                              through for display only

    Raises:
        InvalidTradeError: On a non-positive or non-numeric price/quantity
    """

    action: TradeAction
    date: DateKey
    price: Decimal
    quantity: int
    reference_cost_basis: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "action", TradeAction.parse(self.action))
        object.__setattr__(self, "price", _to_positive_decimal(self.price, "price"))
        object.__setattr__(self, "quantity", _to_positive_int(self.quantity))
        if self.reference_cost_basis is not None:
            object.__setattr__(
                self,
                "reference_cost_basis",
                _to_decimal(self.reference_cost_basis, "reference_cost_basis"),
            )

    @property
    def notional(self) -> Decimal:
        """quantity × price"""
        return self.price * self.quantity

    @property
    def is_buy(self) -> bool:
        return self.action == TradeAction.BUY


def _to_decimal(value: object, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidTradeError(f"{field_name} must be numeric, got {value!r}", field=field_name)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise InvalidTradeError(f"{field_name} must be numeric, got {value!r}", field=field_name) from e
    if not result.is_finite():
        raise InvalidTradeError(f"{field_name} must be finite, got {value!r}", field=field_name)
    return result


def _to_positive_decimal(value: object, field_name: str) -> Decimal:
    result = _to_decimal(value, field_name)
    if result <= ZERO:
        raise InvalidTradeError(f"{field_name} must be positive, got {value!r}", field=field_name)
    return result


def _to_positive_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, Decimal, float, str)):
        raise InvalidTradeError(f"quantity must be an integer, got {value!r}", field="quantity")
    number = _to_decimal(value, "quantity")
    if number != number.to_integral_value():
        raise InvalidTradeError(f"quantity must be a whole number, got {value!r}", field="quantity")
    if number <= ZERO:
        raise InvalidTradeError(f"quantity must be positive, got {value!r}", field="quantity")
    return int(number)


# =============================================================================
# FOLD STATE
# =============================================================================

@dataclass(frozen=True)
class ValuationState:
    """
    Accumulator carried from one day to the next.

    Attributes:
        shares_owned: Running position (signed; non-negative for well-formed input)
        cost_basis: Capital attributed to the open shares
        last_price: Most recent price, for carry-forward (None before the first day)
    """

    shares_owned: int = 0
    cost_basis: Decimal = ZERO
    last_price: Decimal | None = None

    def apply(self, trade: TradeEvent) -> ValuationState:
        """
        Return the state after one trade.

        BUY adds quantity × price to the cost basis. SELL scales the cost
        basis by the fraction of the pre-sale position that is retained,
        forcing it to zero once the position is flat or short.
        """
        if trade.action == TradeAction.BUY:
            return ValuationState(
                shares_owned=self.shares_owned + trade.quantity,
                cost_basis=self.cost_basis + trade.notional,
                last_price=self.last_price,
            )

        shares_after = self.shares_owned - trade.quantity
        if shares_after > 0:
            # Multiply before dividing so exact thirds etc. stay exact
            cost_after = self.cost_basis * shares_after / (shares_after + trade.quantity)
        else:
            cost_after = ZERO
        return ValuationState(
            shares_owned=shares_after,
            cost_basis=cost_after,
            last_price=self.last_price,
        )

# =============================================================================
# OUTPUT
# =============================================================================

@dataclass(frozen=True)
class DailySnapshot:
    """
    One day's derived portfolio state.

    Attributes:
        date: Calendar day
        price: Instrument price used for this day
        shares_owned: Position after any trades of the day
        cost_basis: Capital attributed to open shares
        market_value: shares_owned × price
        unrealized_gain_loss: market_value - cost_basis
        applied_trades: Trades applied on this day, in application order
        has_complete_data: False for a zero-filled day that failed to compute

    Note:
        Values keep full Decimal precision. Rounding for display happens in
        the summary and the response schemas.
    """

    date: date
    price: Decimal
    shares_owned: int
    cost_basis: Decimal
    market_value: Decimal
    unrealized_gain_loss: Decimal
    applied_trades: tuple[TradeEvent, ...] = ()
    has_complete_data: bool = True

    @classmethod
    def from_state(
            cls,
            day: date,
            state: ValuationState,
            price: Decimal,
            applied_trades: tuple[TradeEvent, ...] = (),
    ) -> DailySnapshot:
        market_value = state.shares_owned * price
        return cls(
            date=day,
            price=price,
            shares_owned=state.shares_owned,
            cost_basis=state.cost_basis,
            market_value=market_value,
            unrealized_gain_loss=market_value - state.cost_basis,
            applied_trades=applied_trades,
        )

    @classmethod
    def zero_filled(
            cls,
            day: date,
            applied_trades: tuple[TradeEvent, ...] = (),
    ) -> DailySnapshot:
        """
        Placeholder for a day that could not be valued.

        Every number is zero; the day's trades are kept so the chart can
        still mark them.
        """
        return cls(
            date=day,
            price=ZERO,
            shares_owned=0,
            cost_basis=ZERO,
            market_value=ZERO,
            unrealized_gain_loss=ZERO,
            applied_trades=applied_trades,
            has_complete_data=False,
        )

    @property
    def applied_trade(self) -> TradeEvent | None:
        """The last trade applied on this day (None if no trade)."""
        return self.applied_trades[-1] if self.applied_trades else None


@dataclass(frozen=True)
class DayFault:
    """
    A day, trade or price-feed entry that could not be used.

    Attributes:
        kind: What went wrong
        key: The offending raw key or the affected day
        message: Human-readable detail
        day: The calendar day affected (None when the key itself is unparseable)
    """

    kind: FaultKind
    key: object
    message: str
    day: date | None = None

    def describe(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class DayResult:
    """
    Outcome of one step of the fold: exactly one of snapshot/fault is set.

    applied_trades carries the day's trades for a faulty day, so a
    zero-filled placeholder can still show them.
    """

    day: date
    snapshot: DailySnapshot | None = None
    fault: DayFault | None = None
    applied_trades: tuple[TradeEvent, ...] = ()

    @property
    def ok(self) -> bool:
        return self.fault is None


@dataclass
class ValuationResult:
    """
    Output of one engine run.

    Attributes:
        snapshots: Chronological daily snapshots (empty if aborted)
        faults: Everything that was skipped, zero-filled or caused the abort
        aborted: True if the ABORT policy stopped the run
        warnings: Non-fault data quality notes (e.g. trades after the last price)
    """

    snapshots: list[DailySnapshot]
    faults: list[DayFault] = field(default_factory=list)
    aborted: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def total_points(self) -> int:
        return len(self.snapshots)

    @property
    def complete_points(self) -> int:
        return sum(1 for s in self.snapshots if s.has_complete_data)


@dataclass(frozen=True)
class PortfolioSummary:
    """
    Headline numbers shown above the chart.

    Attributes:
        current_value: Market value on the last day
        cost_basis: Capital attributed to open shares on the last day
        unrealized_gain_loss: current_value - cost_basis
        gain_loss_percentage: unrealized as a percentage of cost basis (0 if no basis)
        total_invested: BUY notionals minus SELL notionals
        as_of: Date of the last snapshot (None if there is no data)
        has_data: False means "not yet loaded"
    """

    current_value: Decimal
    cost_basis: Decimal
    unrealized_gain_loss: Decimal
    gain_loss_percentage: Decimal
    total_invested: Decimal
    as_of: date | None = None
    has_data: bool = True

    @property
    def is_profit(self) -> bool:
        return self.unrealized_gain_loss >= ZERO


@dataclass
class ValuationHistory:
    """
    Chart-ready result returned by ValuationService.get_history().

    Attributes:
        time_range: Window that was applied
        data: Snapshots inside the window
        summary: Headline numbers for the full series
        full_points: Length of the unfiltered series
        faults: Faults raised by the engine run
        warnings: Human-readable data quality notes
        aborted: True if the engine aborted the run
    """

    time_range: TimeRange
    data: list[DailySnapshot]
    summary: PortfolioSummary
    full_points: int
    faults: list[DayFault] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    aborted: bool = False

    @property
    def start_date(self) -> date | None:
        return self.data[0].date if self.data else None

    @property
    def end_date(self) -> date | None:
        return self.data[-1].date if self.data else None

    @property
    def total_points(self) -> int:
        return len(self.data)
