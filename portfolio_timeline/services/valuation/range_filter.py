# portfolio_timeline/services/valuation/range_filter.py
"""
Range Filter: trim a snapshot series to a trailing chart window.

The window is anchored at the LAST snapshot's date, not today, so a
history that ended months ago still shows its final month/year.

    1D  -> anchor - 1 day
    1M  -> anchor - 1 calendar month (day-of-month clamped)
    1Y  -> anchor - 1 calendar year (Feb 29 -> Feb 28)
    MAX -> unchanged

The result is always a contiguous suffix of the input: snapshots are
chronological, so the first one on or after the start date marks the cut.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, timedelta

from portfolio_timeline.services.valuation.types import DailySnapshot, TimeRange
from portfolio_timeline.utils.date_utils import subtract_months, subtract_years

logger = logging.getLogger(__name__)


def window_start(anchor: date, time_range: TimeRange | str) -> date | None:
    """
    First date included in a window ending at anchor.

    Returns:
        The inclusive start date, or None for the unbounded MAX window

    Raises:
        InvalidTimeRangeError: If the window code is unknown
    """
    time_range = TimeRange.parse(time_range)

    if time_range == TimeRange.DAY:
        return anchor - timedelta(days=1)
    if time_range == TimeRange.MONTH:
        return subtract_months(anchor, 1)
    if time_range == TimeRange.YEAR:
        return subtract_years(anchor, 1)
    return None


def filter_snapshots(
        snapshots: Sequence[DailySnapshot],
        time_range: TimeRange | str = TimeRange.ALL,
) -> list[DailySnapshot]:
    """
    Keep the snapshots dated on or after the window start.

    Args:
        snapshots: Chronological snapshot series
        time_range: Window member or code ("1D", "1M", "1Y", "MAX")

    Returns:
        A new list holding a contiguous suffix of the input (the whole
        input for MAX or an empty series)
    """
    time_range = TimeRange.parse(time_range)
    start = window_start(snapshots[-1].date, time_range) if snapshots else None
    if start is None:
        return list(snapshots)

    for index, snapshot in enumerate(snapshots):
        if snapshot.date >= start:
            break
    else:
        index = len(snapshots)

    logger.debug(f"Window {time_range.value} starts {start}: kept {len(snapshots) - index} points")
    return list(snapshots[index:])
