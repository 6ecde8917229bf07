# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Named TimescaleDB defaults used when snapshot metadata is silent
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Named defaults for hypertables, reorder policies and refresh policies.
Extractors fill missing metadata from these; generators compare against
them to decide which job settings are worth emitting.

Design:
- Immutable dataclass, passed explicitly (defaults=...) everywhere
- Environment variable overrides via from_env()
- A lazily created process default for callers that pass nothing
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TimescaleDefaults:
    """
    Defaults mirroring TimescaleDB's own behavior.

    Reorder-policy job values match what timescaledb_information.jobs
    reports for a freshly added policy.
    """
    default_schema: str = "public"

    # Hypertables
    chunk_time_interval: str = "7 days"

    # Reorder policy job settings
    reorder_schedule_interval: str = "1 day"
    reorder_max_runtime: str = "00:00:00"
    reorder_max_retries: int = -1
    reorder_retry_period: str = "00:05:00"

    # Continuous aggregates
    time_bucket_group_by: bool = True

    # Refresh policy
    refresh_buckets_per_batch: int = 1
    refresh_max_batches_per_execution: int = 0
    refresh_newest_first: bool = True

    @classmethod
    def from_env(cls) -> "TimescaleDefaults":
        """Create from environment variables."""
        return cls(
            default_schema=os.getenv("TIMESCALE_DEFAULT_SCHEMA", "public"),
            chunk_time_interval=os.getenv("TIMESCALE_CHUNK_TIME_INTERVAL", "7 days"),
            reorder_schedule_interval=os.getenv("TIMESCALE_REORDER_SCHEDULE_INTERVAL", "1 day"),
            reorder_max_runtime=os.getenv("TIMESCALE_REORDER_MAX_RUNTIME", "00:00:00"),
            reorder_max_retries=int(os.getenv("TIMESCALE_REORDER_MAX_RETRIES", -1)),
            reorder_retry_period=os.getenv("TIMESCALE_REORDER_RETRY_PERIOD", "00:05:00"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

_defaults: Optional[TimescaleDefaults] = None


def get_defaults() -> TimescaleDefaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = TimescaleDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TimescaleDefaults",
    "get_defaults",
    "reset_defaults",
]
