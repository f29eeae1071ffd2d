"""Immutable filter configuration for one run."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    ALL,
    DEFAULT_FETCH_RETRIES,
    DEFAULT_PAGE_SIZE,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_RETRY_BASE_DELAY_SECONDS,
)


class FilterConfig(BaseModel):
    """Filter, display and pagination settings for a collection run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind_filter: str = Field(
        default=ALL, min_length=1, description="'all' or an exact event kind"
    )
    message_filter: str = Field(
        default=ALL, min_length=1, description="'all', a glob, or a regex"
    )
    ignore_case: bool = Field(
        default=False, description="Match messages case-insensitively"
    )
    mode: Literal["list", "kinds", "summary"] = "list"
    format: Literal["text", "json"] = "text"
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    follow: bool = False
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS, gt=0)
    fetch_retries: int = Field(default=DEFAULT_FETCH_RETRIES, ge=0)
    retry_base_delay: float = Field(default=DEFAULT_RETRY_BASE_DELAY_SECONDS, ge=0)

    @property
    def filters_kind(self) -> bool:
        return self.kind_filter != ALL

    @property
    def filters_message(self) -> bool:
        return self.message_filter != ALL
