# ============================================================================
# REORDER POLICY DIFFER
# ============================================================================
# STATUS: Core - Reorder policy add/alter/drop detection
# PURPOSE: Compare source and target reorder policies by table name
# CREATED: 18 OCT 2026
# EXPORTS: ReorderPolicyDiffer
# ============================================================================
"""Reorder Policy Differ."""

from typing import List, Optional, Sequence

from timescale_migrations.features.base import FeatureDiffer
from timescale_migrations.features.extractors import extract_reorder_policies
from timescale_migrations.models.reorder_policy import ReorderPolicyDescriptor
from timescale_migrations.models.snapshot import SchemaSnapshot
from timescale_migrations.operations.base import MigrationOperation
from timescale_migrations.operations.reorder_policy import (
    AddReorderPolicyOperation,
    AlterReorderPolicyOperation,
    DropReorderPolicyOperation,
)

COMPARED_FIELDS = (
    "index_name",
    "initial_start",
    "schedule_interval",
    "max_runtime",
    "max_retries",
    "retry_period",
)


class ReorderPolicyDiffer(FeatureDiffer):
    """
    Diff reorder policies keyed by table name.

    Added policies come first in target order, then drops in source order.
    """

    feature = "reorder_policy"

    def extract(self, snapshot: Optional[SchemaSnapshot]) -> List[ReorderPolicyDescriptor]:
        return extract_reorder_policies(snapshot, self.defaults)

    def diff(
        self,
        source: Sequence[ReorderPolicyDescriptor],
        target: Sequence[ReorderPolicyDescriptor],
    ) -> List[MigrationOperation]:
        source_by_table = {d.table_name: d for d in source}
        target_tables = {d.table_name for d in target}
        operations: List[MigrationOperation] = []

        for new in target:
            old = source_by_table.get(new.table_name)
            if old is None:
                operations.append(AddReorderPolicyOperation.from_descriptor(new))
            elif any(getattr(old, f) != getattr(new, f) for f in COMPARED_FIELDS):
                operations.append(AlterReorderPolicyOperation.between(old, new))

        for old in source:
            if old.table_name not in target_tables:
                operations.append(DropReorderPolicyOperation(
                    table_name=old.table_name,
                    schema_name=old.schema_name,
                ))

        return operations


__all__ = ["ReorderPolicyDiffer"]
