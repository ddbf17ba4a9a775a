# portfolio_timeline/schemas/validators.py
"""
Reusable validation functions for Pydantic schemas.

This module provides:
- Trade action normalization ("B"/"S" short codes)
- Date key normalization (ISO strings, epoch seconds)

These validators raise ValueError subclasses so pydantic reports them as
field errors.
"""

from datetime import date

from portfolio_timeline.services.valuation.types import TradeAction
from portfolio_timeline.utils.date_utils import to_date_key


def validate_trade_action(value: object) -> TradeAction:
    """
    Validate and normalize a trade action.

    Valid formats:
    - Short codes used by static trade lists: B, S
    - Full names: BUY, SELL (any case)

    Raises:
        InvalidTradeError: If the action is unknown
    """
    if value is None:
        raise ValueError("Action cannot be empty")
    return TradeAction.parse(value)


def validate_date_key(value: object) -> date:
    """
    Validate and normalize a trade date.

    Accepts date/datetime objects, "YYYY-MM-DD" strings and epoch seconds.

    Raises:
        MalformedDateError: If the value is not a calendar date
    """
    return to_date_key(value)
