"""Configuration management for Nodewire."""

import logging
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Nodewire configuration loaded from environment variables.

    All settings can be overridden via environment variables with
    the NODEWIRE_ prefix. For example:
        NODEWIRE_LOG_LEVEL=DEBUG
        NODEWIRE_MAX_RIPPLE_DEPTH=128
    """

    # Environment
    env: Literal["development", "production", "test"] = Field(
        default="development",
        description="Environment: development, production, or test",
    )

    # Propagation bounds
    max_ripple_depth: int = Field(
        default=64,
        ge=1,
        le=500,
        description=(
            "Maximum nesting of ripple-triggered updates within one top-level update. "
            "Exceeding it raises PropagationLimitError instead of recursing forever."
        ),
    )
    max_setter_calls: int = Field(
        default=10_000,
        ge=1,
        description=(
            "Maximum property setter invocations for one top-level update, "
            "counting every nested ripple update."
        ),
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )

    model_config = {
        "env_prefix": "NODEWIRE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @model_validator(mode="after")
    def validate_log_level(self) -> "Settings":
        """Normalize log level and reject names the logging module does not know."""
        level = self.log_level.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level {self.log_level!r} is not a valid logging level")
        object.__setattr__(self, "log_level", level)
        return self


# Global settings instance
settings = Settings()
