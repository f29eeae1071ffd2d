"""Pydantic schema for configuration validation."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.constants import (
    DEFAULT_BEGIN_QUANTITY,
    DEFAULT_BEGIN_UNIT,
    DEFAULT_FETCH_RETRIES,
    DEFAULT_PAGE_SIZE,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_RETRY_BASE_DELAY_SECONDS,
)
from .time_window import normalize_unit


class TailConfig(BaseModel):
    """Schema for display and pagination defaults."""

    mode: Literal["list", "kinds", "summary"] = "list"
    format: Literal["text", "json"] = "text"
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=10000)
    poll_interval: float = Field(
        default=DEFAULT_POLL_INTERVAL_SECONDS,
        gt=0,
        description="Seconds to wait between polls in follow mode",
    )
    color: bool = False


class WindowConfig(BaseModel):
    """Schema for the default lookback window."""

    begin: int = Field(default=DEFAULT_BEGIN_QUANTITY, ge=0)
    unit: str = Field(default=DEFAULT_BEGIN_UNIT)

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, v: str) -> str:
        return normalize_unit(v)


class FetchConfig(BaseModel):
    """Schema for transient fetch retries."""

    retries: int = Field(default=DEFAULT_FETCH_RETRIES, ge=0, le=20)
    retry_base_delay: float = Field(default=DEFAULT_RETRY_BASE_DELAY_SECONDS, ge=0)


class LoggingConfig(BaseModel):
    """Schema for logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class EvtailConfig(BaseModel):
    """Root configuration schema."""

    source: Optional[str] = Field(
        default=None, description="Default event source URL or path"
    )
    tail: TailConfig = Field(default_factory=TailConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


__all__ = [
    "EvtailConfig",
    "FetchConfig",
    "LoggingConfig",
    "TailConfig",
    "WindowConfig",
]
