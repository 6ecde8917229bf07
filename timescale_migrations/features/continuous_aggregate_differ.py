# ============================================================================
# CONTINUOUS AGGREGATE DIFFER
# ============================================================================
# STATUS: Core - Continuous aggregate create/alter/drop detection
# PURPOSE: Compare views by name, recreating on query changes
# CREATED: 18 OCT 2026
# EXPORTS: ContinuousAggregateDiffer
# ============================================================================
"""
Continuous Aggregate Differ.

A view's query cannot be redefined in place, so any change to a
structural field (parent, bucket width, bucket column, bucket grouping,
WHERE clause, aggregates, group-by) becomes Drop(old) followed by
Create(new). Only
chunk_interval, create_group_indexes and materialized_only are altered.

List fields compare null-safely: both None is equal, None against a
list (even an empty one) is a change.
"""

from typing import List, Optional, Sequence

from timescale_migrations.features.base import FeatureDiffer
from timescale_migrations.features.extractors import extract_continuous_aggregates
from timescale_migrations.models.continuous_aggregate import ContinuousAggregateDescriptor
from timescale_migrations.models.snapshot import SchemaSnapshot
from timescale_migrations.operations.base import MigrationOperation
from timescale_migrations.operations.continuous_aggregate import (
    AlterContinuousAggregateOperation,
    CreateContinuousAggregateOperation,
    DropContinuousAggregateOperation,
)


def lists_equal(a: Optional[list], b: Optional[list]) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return list(a) == list(b)


def structure_changed(old: ContinuousAggregateDescriptor, new: ContinuousAggregateDescriptor) -> bool:
    return (
        old.parent_name != new.parent_name
        or old.time_bucket_width != new.time_bucket_width
        or old.time_bucket_source_column != new.time_bucket_source_column
        or old.time_bucket_group_by != new.time_bucket_group_by
        or old.where_clause != new.where_clause
        or not lists_equal(old.aggregate_functions, new.aggregate_functions)
        or not lists_equal(old.group_by_columns, new.group_by_columns)
    )


def options_changed(old: ContinuousAggregateDescriptor, new: ContinuousAggregateDescriptor) -> bool:
    return (
        old.chunk_interval != new.chunk_interval
        or old.create_group_indexes != new.create_group_indexes
        or old.materialized_only != new.materialized_only
    )


def _drop(descriptor: ContinuousAggregateDescriptor) -> DropContinuousAggregateOperation:
    return DropContinuousAggregateOperation(
        materialized_view_name=descriptor.materialized_view_name,
        schema_name=descriptor.schema_name,
    )


class ContinuousAggregateDiffer(FeatureDiffer):
    """Diff continuous aggregates keyed by materialized view name."""

    feature = "continuous_aggregate"

    def extract(self, snapshot: Optional[SchemaSnapshot]) -> List[ContinuousAggregateDescriptor]:
        return extract_continuous_aggregates(snapshot, self.defaults)

    def diff(
        self,
        source: Sequence[ContinuousAggregateDescriptor],
        target: Sequence[ContinuousAggregateDescriptor],
    ) -> List[MigrationOperation]:
        source_by_view = {d.materialized_view_name: d for d in source}
        target_views = {d.materialized_view_name for d in target}
        operations: List[MigrationOperation] = []

        for new in target:
            old = source_by_view.get(new.materialized_view_name)
            if old is None:
                operations.append(CreateContinuousAggregateOperation.from_descriptor(new))
            elif structure_changed(old, new):
                operations.append(_drop(old))
                operations.append(CreateContinuousAggregateOperation.from_descriptor(new))
            elif options_changed(old, new):
                operations.append(AlterContinuousAggregateOperation.between(old, new))

        for old in source:
            if old.materialized_view_name not in target_views:
                operations.append(_drop(old))

        return operations


__all__ = ["ContinuousAggregateDiffer", "lists_equal", "structure_changed"]
