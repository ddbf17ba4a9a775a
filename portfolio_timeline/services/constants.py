# portfolio_timeline/services/constants.py
"""
Centralized constants for the Portfolio Timeline services.

Usage:
    from portfolio_timeline.services.constants import MONEY_QUANTUM
"""

from decimal import Decimal

# =============================================================================
# DISPLAY PRECISION
# =============================================================================

# Snapshots and snapshot responses keep full Decimal precision; only the
# summary rounds money to cents and percentages to two places.
MONEY_QUANTUM: Decimal = Decimal("0.01")
PERCENT_QUANTUM: Decimal = Decimal("0.01")

ZERO: Decimal = Decimal("0")
HUNDRED: Decimal = Decimal("100")


# =============================================================================
# TRADE ACTION CODES
# =============================================================================

# Short codes used by the dashboard's static trade lists
BUY_CODES: frozenset[str] = frozenset({"B", "BUY"})
SELL_CODES: frozenset[str] = frozenset({"S", "SELL"})
