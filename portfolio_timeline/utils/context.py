# portfolio_timeline/utils/context.py
"""
Correlation ID context for the Portfolio Timeline library.

Every valuation run is tagged with a correlation ID so that all log lines
emitted while computing one series can be traced together, even when several
dashboards compute series concurrently.

Uses Python's contextvars, so the ID is isolated per thread and per asyncio
task and never leaks between independent callers.

Usage:
    from portfolio_timeline.utils.context import correlation_scope

    with correlation_scope("chart-42"):
        service.get_history(trades)
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

# =============================================================================
# CONTEXT VARIABLES
# =============================================================================

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


# =============================================================================
# CORRELATION ID
# =============================================================================

def get_correlation_id() -> str | None:
    """
    Get the current correlation ID.

    Returns:
        The correlation ID of the active scope, or None if not set.
    """
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID."""
    _correlation_id_var.set(None)


def new_correlation_id() -> str:
    """Generate a short random correlation ID."""
    return uuid.uuid4().hex[:12]


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Run a block under a correlation ID, restoring the previous one afterwards.

    If no ID is given, the currently active one is reused; when none is
    active a fresh ID is generated.

    Args:
        correlation_id: Explicit ID to use (optional)

    Yields:
        The correlation ID active inside the block
    """
    active = correlation_id or get_correlation_id() or new_correlation_id()
    token = _correlation_id_var.set(active)
    try:
        yield active
    finally:
        _correlation_id_var.reset(token)
