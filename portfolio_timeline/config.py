# portfolio_timeline/config.py
"""
Library configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- ENVIRONMENT: Runtime mode (development, test, production)
- LOG_LEVEL / LOG_FORMAT: Logging output (see utils/logging.py)
- FAULT_POLICY: What the valuation engine does when a day fails
- DEFAULT_TIME_RANGE: Window used when the caller does not pick one

Configuration is validated when the module is imported. Invalid values
raise a pydantic ValidationError with a descriptive message.

Usage:
    from portfolio_timeline.config import settings

    if settings.fault_policy == "abort":
        ...
"""
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Library settings loaded from environment variables.

    Environment variables:
        - ENVIRONMENT: Runtime environment (development, test, production)
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" for humans, "json" for log aggregation
        - FAULT_POLICY: "continue" (skip/zero-fill faulty days) or
          "abort" (empty result on the first fault)
        - DEFAULT_TIME_RANGE: "1D", "1M", "1Y" or "MAX"
    """

    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Runtime environment (development, test, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log output format"
    )

    fault_policy: Literal["continue", "abort"] = Field(
        default="continue",
        description="Valuation engine behaviour when a day cannot be computed"
    )
    default_time_range: Literal["1D", "1M", "1Y", "MAX"] = Field(
        default="MAX",
        description="Chart window used when none is requested"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize the log level and reject unknown names."""
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: '{value}'. "
                f"Valid levels are: {', '.join(VALID_LOG_LEVELS)}"
            )
        return normalized

    @field_validator("default_time_range", mode="before")
    @classmethod
    def normalize_time_range(cls, value: str) -> str:
        return value.strip().upper() if isinstance(value, str) else value

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


settings = Settings()
