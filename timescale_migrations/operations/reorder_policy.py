# ============================================================================
# REORDER POLICY OPERATIONS
# ============================================================================
# STATUS: Core - Reorder policy add/alter/drop records
# PURPOSE: Carry reorder policy changes to the SQL generator
# CREATED: 18 OCT 2026
# ============================================================================
"""Reorder policy operations."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from timescale_migrations.models.common import parse_initial_start
from timescale_migrations.models.reorder_policy import ReorderPolicyDescriptor
from timescale_migrations.operations.base import MigrationOperation


class AddReorderPolicyOperation(ReorderPolicyDescriptor, MigrationOperation):
    """Attach a reorder policy to a hypertable."""

    @classmethod
    def from_descriptor(cls, descriptor: ReorderPolicyDescriptor) -> "AddReorderPolicyOperation":
        return cls(**descriptor.model_dump())


class AlterReorderPolicyOperation(MigrationOperation):
    """Change an existing reorder policy. Each field has an old_ twin."""

    table_name: str = Field(..., min_length=1)
    schema_name: str = "public"

    index_name: str = Field(..., min_length=1)
    initial_start: Optional[datetime] = None
    schedule_interval: Optional[str] = None
    max_runtime: Optional[str] = None
    max_retries: Optional[int] = None
    retry_period: Optional[str] = None

    old_index_name: Optional[str] = None
    old_initial_start: Optional[datetime] = None
    old_schedule_interval: Optional[str] = None
    old_max_runtime: Optional[str] = None
    old_max_retries: Optional[int] = None
    old_retry_period: Optional[str] = None

    @field_validator("initial_start", "old_initial_start", mode="before")
    @classmethod
    def _parse_initial_start(cls, value: Any, info) -> Optional[datetime]:
        return parse_initial_start(value, info.field_name)

    @property
    def requires_recreation(self) -> bool:
        """Index or start time changed: the policy job has a new identity."""
        return (
            self.index_name != self.old_index_name
            or self.initial_start != self.old_initial_start
        )

    def target_state(self) -> AddReorderPolicyOperation:
        """The desired policy as an add operation."""
        return AddReorderPolicyOperation(
            table_name=self.table_name,
            schema_name=self.schema_name,
            index_name=self.index_name,
            initial_start=self.initial_start,
            schedule_interval=self.schedule_interval,
            max_runtime=self.max_runtime,
            max_retries=self.max_retries,
            retry_period=self.retry_period,
        )

    @classmethod
    def between(
        cls, old: ReorderPolicyDescriptor, new: ReorderPolicyDescriptor
    ) -> "AlterReorderPolicyOperation":
        return cls(
            table_name=new.table_name,
            schema_name=new.schema_name,
            index_name=new.index_name,
            initial_start=new.initial_start,
            schedule_interval=new.schedule_interval,
            max_runtime=new.max_runtime,
            max_retries=new.max_retries,
            retry_period=new.retry_period,
            old_index_name=old.index_name,
            old_initial_start=old.initial_start,
            old_schedule_interval=old.schedule_interval,
            old_max_runtime=old.max_runtime,
            old_max_retries=old.max_retries,
            old_retry_period=old.retry_period,
        )


class DropReorderPolicyOperation(MigrationOperation):
    """Remove the reorder policy of a hypertable."""

    table_name: str = Field(..., min_length=1)
    schema_name: str = "public"


__all__ = [
    "AddReorderPolicyOperation",
    "AlterReorderPolicyOperation",
    "DropReorderPolicyOperation",
]
