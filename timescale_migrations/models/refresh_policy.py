# ============================================================================
# REFRESH POLICY DESCRIPTOR
# ============================================================================
# STATUS: Core - Continuous aggregate refresh policy value record
# PURPOSE: Sliding refresh window and job settings for one continuous aggregate
# CREATED: 18 OCT 2026
# ============================================================================
"""
Continuous aggregate refresh policy descriptor.

Offsets follow the interval rules used everywhere else: None renders as
NULL (open-ended window), a bare integer as a raw count, anything else as
an interval literal.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from timescale_migrations.exceptions import ConfigurationError
from timescale_migrations.models.common import parse_initial_start


class RefreshPolicyDescriptor(BaseModel):
    """Desired refresh policy of one continuous aggregate."""

    materialized_view_name: str = Field(..., min_length=1)
    schema_name: str = "public"
    start_offset: Optional[str] = None
    end_offset: Optional[str] = None
    schedule_interval: Optional[str] = None
    initial_start: Optional[datetime] = None
    if_not_exists: bool = False
    timezone: Optional[str] = None
    include_tiered_data: Optional[bool] = None
    buckets_per_batch: int = 1
    max_batches_per_execution: int = 0
    refresh_newest_first: bool = True

    model_config = {"frozen": True}

    @field_validator("start_offset", "end_offset", mode="before")
    @classmethod
    def _offset_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("initial_start", mode="before")
    @classmethod
    def _parse_initial_start(cls, value: Any) -> Optional[datetime]:
        return parse_initial_start(value, "initial_start")

    @field_validator("buckets_per_batch")
    @classmethod
    def _check_buckets_per_batch(cls, value: int) -> int:
        if value < 1:
            raise ConfigurationError(
                f"buckets_per_batch must be greater than or equal to 1, got {value}.",
                field="buckets_per_batch",
                value=value,
            )
        return value

    @field_validator("max_batches_per_execution")
    @classmethod
    def _check_max_batches(cls, value: int) -> int:
        if value < 0:
            raise ConfigurationError(
                f"max_batches_per_execution must be greater than or equal to 0 "
                f"(0 means unlimited), got {value}.",
                field="max_batches_per_execution",
                value=value,
            )
        return value


__all__ = ["RefreshPolicyDescriptor"]
