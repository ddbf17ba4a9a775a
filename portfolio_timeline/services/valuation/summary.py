# portfolio_timeline/services/valuation/summary.py
"""
Summary statistics for the dashboard header.

Reads the last snapshot of a series for current value, cost basis and
unrealized P&L, and folds the raw trades for the "total invested" figure.

Formulas:
    gain_loss_percentage = unrealized / cost_basis × 100   (0 if cost_basis is 0)
    total_invested       = Σ BUY notional - Σ SELL notional

Money is rounded to cents and percentages to 0.01 here; snapshots keep
full precision.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from portfolio_timeline.services.constants import (
    HUNDRED,
    MONEY_QUANTUM,
    PERCENT_QUANTUM,
    ZERO,
)
from portfolio_timeline.services.valuation.types import (
    DailySnapshot,
    PortfolioSummary,
    TradeEvent,
)


def total_invested(trades: Iterable[TradeEvent]) -> Decimal:
    """Net capital put in: BUY notionals minus SELL notionals."""
    total = ZERO
    for trade in trades:
        if trade.is_buy:
            total += trade.notional
        else:
            total -= trade.notional
    return total


def gain_loss_percentage(unrealized: Decimal, cost_basis: Decimal) -> Decimal:
    """
    Unrealized P&L as a percentage of cost basis.

    Returns 0 when there is no cost basis (flat position).
    """
    if cost_basis == ZERO:
        return ZERO
    return _round(unrealized / cost_basis * HUNDRED, PERCENT_QUANTUM)


def summarize(
        snapshots: Sequence[DailySnapshot],
        trades: Iterable[TradeEvent] | None = None,
) -> PortfolioSummary:
    """
    Build the headline numbers for a snapshot series.

    Args:
        snapshots: Chronological snapshots (usually the full, unfiltered series)
        trades: Trades for the total-invested fold. If omitted, the last
                snapshot's cost basis is reported instead.

    Returns:
        PortfolioSummary; with has_data=False and zeros for an empty series
    """
    if not snapshots:
        return PortfolioSummary(
            current_value=ZERO,
            cost_basis=ZERO,
            unrealized_gain_loss=ZERO,
            gain_loss_percentage=ZERO,
            total_invested=ZERO,
            as_of=None,
            has_data=False,
        )

    last = snapshots[-1]
    invested = total_invested(trades) if trades is not None else last.cost_basis

    return PortfolioSummary(
        current_value=_round(last.market_value),
        cost_basis=_round(last.cost_basis),
        unrealized_gain_loss=_round(last.unrealized_gain_loss),
        gain_loss_percentage=gain_loss_percentage(last.unrealized_gain_loss, last.cost_basis),
        total_invested=_round(invested),
        as_of=last.date,
        has_data=True,
    )


def _round(value: Decimal, quantum: Decimal = MONEY_QUANTUM) -> Decimal:
    return value.quantize(quantum, rounding=ROUND_HALF_UP)
