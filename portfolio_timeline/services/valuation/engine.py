# portfolio_timeline/services/valuation/engine.py
"""
Valuation Engine: trade events -> gap-filled daily snapshots.

The engine turns a sparse, unordered list of buy/sell events for a single
instrument into one DailySnapshot per calendar day, ready for charting.

Algorithm (a fold over the sorted day sequence):
1. Normalize every trade date and price-feed key to a calendar date,
   recording a MALFORMED_DATE fault for anything unparseable
2. Sort trades by date (BUYs before SELLs on the same day, then input order)
3. Build the day range:
   - no price feed: every calendar day from first to last trade
   - price feed: the feed's dates, ascending, from the first trade date on
4. Fold: carry an immutable ValuationState forward, applying all trades
   dated on or before each day, and emit one DayResult per day
5. Apply the FaultPolicy to the faulty results

Price sourcing:
    With a feed, the feed's closing price is used on every day. Without
    one, the day's last applied trade sets the price; other days carry the
    previous price forward.

Complexity: O(D + T) where D = number of days, T = number of trades.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal, InvalidOperation

from portfolio_timeline.services.exceptions import MalformedDateError
from portfolio_timeline.services.valuation.types import (
    DailySnapshot,
    DayFault,
    DayResult,
    FaultKind,
    FaultPolicy,
    TradeEvent,
    ValuationResult,
    ValuationState,
)
from portfolio_timeline.utils.date_utils import DateKey, iter_days, to_date_key

logger = logging.getLogger(__name__)

PriceFeed = Mapping[DateKey, object]


class ValuationEngine:
    """
    Computes daily portfolio snapshots from trade events.

    Stateless apart from the configured fault policy: every call builds its
    output from scratch, so one instance can serve concurrent callers.

    Attributes:
        fault_policy: CONTINUE (skip bad entries, zero-fill bad days) or
                      ABORT (return an empty series on the first fault)
    """

    def __init__(self, fault_policy: FaultPolicy | str | None = None) -> None:
        if fault_policy is None:
            from portfolio_timeline.config import settings
            fault_policy = settings.fault_policy
        self.fault_policy = FaultPolicy(fault_policy)

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def compute(
            self,
            trades: Iterable[TradeEvent],
            prices: PriceFeed | None = None,
    ) -> list[DailySnapshot]:
        """
        Compute the daily snapshot series.

        Args:
            trades: Trade events in any order
            prices: Optional closing prices keyed by date, ISO string or
                    epoch seconds

        Returns:
            Chronological snapshots; empty for an empty trade list or an
            aborted run
        """
        return self.run(trades, prices).snapshots

    def run(
            self,
            trades: Iterable[TradeEvent],
            prices: PriceFeed | None = None,
    ) -> ValuationResult:
        """
        Compute the daily snapshot series together with its faults.

        Never raises for per-day failures; see FaultPolicy.
        """
        faults: list[DayFault] = []
        warnings: list[str] = []

        dated_trades = self._normalize_trades(trades, faults)
        if faults and self.fault_policy == FaultPolicy.ABORT:
            return self._abort(faults)

        if not dated_trades:
            if faults:
                warnings.append("No trade with a valid date; nothing to value")
            return ValuationResult(snapshots=[], faults=faults, warnings=warnings)

        first_trade_date = dated_trades[0][0]

        if prices is None:
            days = list(iter_days(first_trade_date, dated_trades[-1][0]))
            price_by_day: dict[date, object] | None = None
        else:
            price_by_day = self._normalize_prices(prices, faults)
            if faults and self.fault_policy == FaultPolicy.ABORT:
                return self._abort(faults)
            # Days before the first trade carry no position and are dropped
            days = sorted(d for d in price_by_day if d >= first_trade_date)
            late = [t for d, t in dated_trades if not days or d > days[-1]]
            if late:
                warnings.append(
                    f"{len(late)} trade(s) dated after the last price date are not represented"
                )

        logger.debug(
            f"Valuing {len(dated_trades)} trades over {len(days)} days "
            f"(price feed: {'yes' if price_by_day is not None else 'no'})"
        )

        snapshots: list[DailySnapshot] = []
        for result in self._fold(dated_trades, days, price_by_day):
            if result.ok:
                snapshots.append(result.snapshot)
                continue

            faults.append(result.fault)
            if self.fault_policy == FaultPolicy.ABORT:
                return self._abort(faults)

            logger.warning(
                f"Zero-filling {result.day}: {result.fault.message}",
                extra={"fault_kind": result.fault.kind.value},
            )
            snapshots.append(DailySnapshot.zero_filled(result.day, result.applied_trades))

        if faults:
            warnings.append(f"{len(faults)} input entries or days could not be valued")

        return ValuationResult(snapshots=snapshots, faults=faults, warnings=warnings)

    # =========================================================================
    # FOLD
    # =========================================================================

    def _fold(
            self,
            dated_trades: list[tuple[date, TradeEvent]],
            days: list[date],
            price_by_day: dict[date, object] | None,
    ) -> Iterable[DayResult]:
        """
        Walk the days, applying every trade dated on or before each day.

        A day whose price cannot be used still applies its trades, so the
        position stays correct for the days after it. A day whose trades
        cannot be applied leaves the state untouched.
        """
        state = ValuationState(last_price=dated_trades[0][1].price)
        txn_index = 0
        num_txns = len(dated_trades)

        for day in days:
            todays: list[TradeEvent] = []
            while txn_index < num_txns and dated_trades[txn_index][0] <= day:
                todays.append(dated_trades[txn_index][1])
                txn_index += 1

            result, state = self._step(state, day, tuple(todays), price_by_day)
            yield result

    def _step(
            self,
            state: ValuationState,
            day: date,
            todays: tuple[TradeEvent, ...],
            price_by_day: dict[date, object] | None,
    ) -> tuple[DayResult, ValuationState]:
        """
        Value a single day.

        Returns the day's result and the state to carry into the next day.
        Failures come back as a faulty DayResult instead of being raised.
        """
        try:
            after = state
            for trade in todays:
                after = after.apply(trade)
        except (ArithmeticError, ValueError, TypeError) as e:
            return self._fault(FaultKind.COMPUTATION, day, e, todays), state

        try:
            if price_by_day is not None:
                price = _to_price(price_by_day[day])
            elif todays:
                price = todays[-1].price
            else:
                price = after.last_price
        except ValueError as e:
            return self._fault(FaultKind.MALFORMED_PRICE, day, e, todays), after

        try:
            snapshot = DailySnapshot.from_state(day, after, price, todays)
        except (ArithmeticError, ValueError, TypeError) as e:
            return self._fault(FaultKind.COMPUTATION, day, e, todays), after

        next_state = ValuationState(after.shares_owned, after.cost_basis, price)
        return DayResult(day=day, snapshot=snapshot), next_state

    @staticmethod
    def _fault(
            kind: FaultKind,
            day: date,
            error: Exception,
            todays: tuple[TradeEvent, ...],
    ) -> DayResult:
        return DayResult(
            day=day,
            fault=DayFault(kind=kind, key=day, message=f"{day}: {error}", day=day),
            applied_trades=todays,
        )

    # =========================================================================
    # INPUT NORMALIZATION
    # =========================================================================

    def _normalize_trades(
            self,
            trades: Iterable[TradeEvent],
            faults: list[DayFault],
    ) -> list[tuple[date, TradeEvent]]:
        """
        Resolve trade dates and sort chronologically.

        Same-day ordering: BUYs before SELLs, then input order (sorted() is
        stable). Trades with unparseable dates are recorded as faults.
        """
        dated: list[tuple[date, TradeEvent]] = []
        for trade in trades:
            try:
                dated.append((to_date_key(trade.date), trade))
            except MalformedDateError as e:
                faults.append(
                    DayFault(kind=FaultKind.MALFORMED_DATE, key=trade.date, message=e.message)
                )
                self._log_fault(f"Skipping trade with malformed date {trade.date!r}")

        dated.sort(key=lambda item: (item[0], 0 if item[1].is_buy else 1))
        return dated

    def _normalize_prices(
            self,
            prices: PriceFeed,
            faults: list[DayFault],
    ) -> dict[date, object]:
        """
        Re-key the price feed by calendar date.

        Values are converted lazily so that a bad value only affects its own
        day. When two keys resolve to the same date, the later one wins.
        """
        price_by_day: dict[date, object] = {}
        for key, value in prices.items():
            try:
                price_by_day[to_date_key(key)] = value
            except MalformedDateError as e:
                faults.append(
                    DayFault(kind=FaultKind.MALFORMED_DATE, key=key, message=e.message)
                )
                self._log_fault(f"Skipping price entry with malformed date {key!r}")
        return price_by_day

    # =========================================================================
    # FAULT HANDLING
    # =========================================================================

    def _log_fault(self, message: str) -> None:
        if self.fault_policy == FaultPolicy.ABORT:
            logger.error(message)
        else:
            logger.warning(message)

    def _abort(self, faults: list[DayFault]) -> ValuationResult:
        logger.error(
            f"Valuation aborted: {faults[-1].describe()}",
            extra={"fault_count": len(faults)},
        )
        return ValuationResult(
            snapshots=[],
            faults=faults,
            aborted=True,
            warnings=[f"Valuation aborted: {faults[-1].describe()}"],
        )


def _to_price(value: object) -> Decimal:
    """Convert a price-feed value to a finite, non-negative Decimal."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"price {value!r} is not numeric")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"price {value!r} is not numeric") from e
    if not price.is_finite() or price < 0:
        raise ValueError(f"price {value!r} is not a valid closing price")
    return price


def compute(
        trades: Iterable[TradeEvent],
        prices: PriceFeed | None = None,
        fault_policy: FaultPolicy | str | None = None,
) -> list[DailySnapshot]:
    """Convenience wrapper: ValuationEngine(fault_policy).compute(trades, prices)."""
    return ValuationEngine(fault_policy).compute(trades, prices)
