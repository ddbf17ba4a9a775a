# portfolio_timeline/utils/__init__.py
"""
Utility modules for the Portfolio Timeline library.

This package contains cross-cutting utilities:
- logging: Logging configuration with correlation ID support
- context: Correlation ID management
- date_utils: Date-key normalization and calendar arithmetic

Usage:
    from portfolio_timeline.utils import setup_logging, get_logger
    from portfolio_timeline.utils.date_utils import to_date_key
"""

from portfolio_timeline.utils.context import (
    clear_correlation_id,
    correlation_scope,
    get_correlation_id,
    set_correlation_id,
)
from portfolio_timeline.utils.logging import get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "correlation_scope",
]
