# portfolio_timeline/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors. The valuation engine
itself never lets them escape a run: per-day failures are converted into
DayFault records and handled by the caller's FaultPolicy. They do escape
from constructors and parsers, where the caller supplied invalid input.

Exception Hierarchy:
    ServiceError (base)
    └── ValidationError
        ├── MalformedDateError
        ├── InvalidTradeError
        └── InvalidTimeRangeError
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError, ValueError):
    """
    Raised when input validation fails.

    Subclasses ValueError so that pydantic validators can raise it directly
    and have it reported as a field error.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class MalformedDateError(ValidationError):
    """
    Raised when a trade date or price-series key is not a calendar date.

    Attributes:
        value: The raw key that could not be parsed
    """

    def __init__(self, value: object, reason: str | None = None) -> None:
        self.value = value
        message = f"Cannot interpret {value!r} as a calendar date"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, field="date")


class InvalidTradeError(ValidationError):
    """Raised when a trade event has a non-positive price or quantity."""


class InvalidTimeRangeError(ValidationError):
    """
    Raised when an unknown chart window is requested.

    Valid windows are: 1D, 1M, 1Y, MAX
    """

    def __init__(self, time_range: object) -> None:
        self.time_range = time_range
        super().__init__(
            f"Invalid time range: '{time_range}'. Valid options: 1D, 1M, 1Y, MAX",
            field="time_range"
        )
