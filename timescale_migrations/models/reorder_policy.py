# ============================================================================
# REORDER POLICY DESCRIPTOR
# ============================================================================
# STATUS: Core - Reorder policy value record
# PURPOSE: Clustering index and background-job settings for one hypertable
# CREATED: 18 OCT 2026
# ============================================================================
"""
Reorder policy descriptor.

Job settings left as None were not configured; generators treat them as
the TimescaleDB defaults and emit nothing for them.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from timescale_migrations.models.common import parse_initial_start


class ReorderPolicyDescriptor(BaseModel):
    """Desired reorder policy of one hypertable."""

    table_name: str = Field(..., min_length=1)
    schema_name: str = "public"
    index_name: str = Field(..., min_length=1)
    initial_start: Optional[datetime] = None
    schedule_interval: Optional[str] = None
    max_runtime: Optional[str] = None
    max_retries: Optional[int] = None
    retry_period: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("initial_start", mode="before")
    @classmethod
    def _parse_initial_start(cls, value: Any) -> Optional[datetime]:
        return parse_initial_start(value, "initial_start")


__all__ = ["ReorderPolicyDescriptor"]
