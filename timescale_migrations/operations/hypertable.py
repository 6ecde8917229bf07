# ============================================================================
# HYPERTABLE OPERATIONS
# ============================================================================
# STATUS: Core - Hypertable create/alter records
# PURPOSE: Carry target (and old) hypertable settings to the SQL generator
# CREATED: 18 OCT 2026
# ============================================================================
"""
Hypertable operations.

There is no drop operation: a hypertable disappears together with its
table, which the host's table differ handles.
"""

from typing import List, Optional

from pydantic import Field

from timescale_migrations.models.hypertable import Dimension, HypertableDescriptor
from timescale_migrations.operations.base import MigrationOperation


class CreateHypertableOperation(HypertableDescriptor, MigrationOperation):
    """Convert an existing table into a hypertable."""

    @classmethod
    def from_descriptor(cls, descriptor: HypertableDescriptor) -> "CreateHypertableOperation":
        return cls(**descriptor.model_dump())


class AlterHypertableOperation(MigrationOperation):
    """Change settings of an existing hypertable. Each field has an old_ twin."""

    table_name: str = Field(..., min_length=1)
    schema_name: str = "public"

    chunk_time_interval: str = "7 days"
    enable_compression: bool = False
    chunk_skip_columns: Optional[List[str]] = None
    additional_dimensions: Optional[List[Dimension]] = None
    compression_segment_by: Optional[List[str]] = None
    compression_order_by: Optional[List[str]] = None

    old_chunk_time_interval: str = "7 days"
    old_enable_compression: bool = False
    old_chunk_skip_columns: Optional[List[str]] = None
    old_additional_dimensions: Optional[List[Dimension]] = None
    old_compression_segment_by: Optional[List[str]] = None
    old_compression_order_by: Optional[List[str]] = None

    @classmethod
    def between(
        cls, old: HypertableDescriptor, new: HypertableDescriptor
    ) -> "AlterHypertableOperation":
        """Build from the source and target descriptors of one table."""
        return cls(
            table_name=new.table_name,
            schema_name=new.schema_name,
            chunk_time_interval=new.chunk_time_interval,
            enable_compression=new.enable_compression,
            chunk_skip_columns=new.chunk_skip_columns,
            additional_dimensions=new.additional_dimensions,
            compression_segment_by=new.compression_segment_by,
            compression_order_by=new.compression_order_by,
            old_chunk_time_interval=old.chunk_time_interval,
            old_enable_compression=old.enable_compression,
            old_chunk_skip_columns=old.chunk_skip_columns,
            old_additional_dimensions=old.additional_dimensions,
            old_compression_segment_by=old.compression_segment_by,
            old_compression_order_by=old.compression_order_by,
        )


__all__ = ["CreateHypertableOperation", "AlterHypertableOperation"]
