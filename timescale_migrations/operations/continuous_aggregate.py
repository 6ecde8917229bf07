# ============================================================================
# CONTINUOUS AGGREGATE OPERATIONS
# ============================================================================
# STATUS: Core - Continuous aggregate create/alter/drop records
# PURPOSE: Carry view definitions and option changes to the SQL generator
# CREATED: 18 OCT 2026
# ============================================================================
"""
Continuous aggregate operations.

Alter only covers the WITH options TimescaleDB can change in place;
anything touching the view query is a drop followed by a create.
"""

from typing import Optional

from pydantic import Field

from timescale_migrations.models.continuous_aggregate import ContinuousAggregateDescriptor
from timescale_migrations.operations.base import MigrationOperation


class CreateContinuousAggregateOperation(ContinuousAggregateDescriptor, MigrationOperation):
    """Create a continuous aggregate view."""

    @classmethod
    def from_descriptor(
        cls, descriptor: ContinuousAggregateDescriptor
    ) -> "CreateContinuousAggregateOperation":
        return cls(**descriptor.model_dump())


class AlterContinuousAggregateOperation(MigrationOperation):
    """Change the alterable WITH options of a continuous aggregate."""

    materialized_view_name: str = Field(..., min_length=1)
    schema_name: str = "public"

    chunk_interval: Optional[str] = None
    create_group_indexes: bool = False
    materialized_only: bool = False

    old_chunk_interval: Optional[str] = None
    old_create_group_indexes: bool = False
    old_materialized_only: bool = False

    @classmethod
    def between(
        cls, old: ContinuousAggregateDescriptor, new: ContinuousAggregateDescriptor
    ) -> "AlterContinuousAggregateOperation":
        return cls(
            materialized_view_name=new.materialized_view_name,
            schema_name=new.schema_name,
            chunk_interval=new.chunk_interval,
            create_group_indexes=new.create_group_indexes,
            materialized_only=new.materialized_only,
            old_chunk_interval=old.chunk_interval,
            old_create_group_indexes=old.create_group_indexes,
            old_materialized_only=old.materialized_only,
        )


class DropContinuousAggregateOperation(MigrationOperation):
    """Drop a continuous aggregate view."""

    materialized_view_name: str = Field(..., min_length=1)
    schema_name: str = "public"


__all__ = [
    "CreateContinuousAggregateOperation",
    "AlterContinuousAggregateOperation",
    "DropContinuousAggregateOperation",
]
