# ============================================================================
# HYPERTABLE DIFFER
# ============================================================================
# STATUS: Core - Hypertable create/alter detection
# PURPOSE: Compare source and target hypertable descriptors by table name
# CREATED: 18 OCT 2026
# EXPORTS: HypertableDiffer
# ============================================================================
"""
Hypertable Differ.

- New table in target: CreateHypertableOperation
- Table removed from target: nothing (the table drop removes the hypertable)
- Matched: AlterHypertableOperation when any alterable setting changed

Chunk-skip columns compare as sets. Compression segment-by/order-by and
additional dimensions compare in order.
"""

from typing import List, Optional, Sequence

from timescale_migrations.features.base import FeatureDiffer
from timescale_migrations.features.extractors import extract_hypertables
from timescale_migrations.models.hypertable import HypertableDescriptor
from timescale_migrations.models.snapshot import SchemaSnapshot
from timescale_migrations.operations.base import MigrationOperation
from timescale_migrations.operations.hypertable import (
    AlterHypertableOperation,
    CreateHypertableOperation,
)


def chunk_skip_columns_equal(a: Optional[List[str]], b: Optional[List[str]]) -> bool:
    """Order-insensitive; None and empty are the same."""
    return set(a or []) == set(b or [])


def needs_alter(old: HypertableDescriptor, new: HypertableDescriptor) -> bool:
    return (
        old.chunk_time_interval != new.chunk_time_interval
        or old.effective_compression != new.effective_compression
        or not chunk_skip_columns_equal(old.chunk_skip_columns, new.chunk_skip_columns)
        or list(old.compression_segment_by or []) != list(new.compression_segment_by or [])
        or list(old.compression_order_by or []) != list(new.compression_order_by or [])
        or list(old.additional_dimensions or []) != list(new.additional_dimensions or [])
    )


class HypertableDiffer(FeatureDiffer):
    """Diff hypertable descriptors keyed by table name."""

    feature = "hypertable"

    def extract(self, snapshot: Optional[SchemaSnapshot]) -> List[HypertableDescriptor]:
        return extract_hypertables(snapshot, self.defaults)

    def diff(
        self,
        source: Sequence[HypertableDescriptor],
        target: Sequence[HypertableDescriptor],
    ) -> List[MigrationOperation]:
        source_by_table = {d.table_name: d for d in source}
        operations: List[MigrationOperation] = []

        for new in target:
            old = source_by_table.get(new.table_name)
            if old is None:
                operations.append(CreateHypertableOperation.from_descriptor(new))
            elif needs_alter(old, new):
                operations.append(AlterHypertableOperation.between(old, new))

        return operations


__all__ = ["HypertableDiffer", "chunk_skip_columns_equal", "needs_alter"]
