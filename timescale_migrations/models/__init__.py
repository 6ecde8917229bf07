"""
Descriptor and snapshot models.

All models are frozen pydantic records.
"""

from timescale_migrations.models.snapshot import SchemaSnapshot, SnapshotObject
from timescale_migrations.models.hypertable import (
    Dimension,
    HypertableDescriptor,
    effective_compression,
)
from timescale_migrations.models.reorder_policy import ReorderPolicyDescriptor
from timescale_migrations.models.continuous_aggregate import (
    AggregateFunction,
    ContinuousAggregateDescriptor,
)
from timescale_migrations.models.refresh_policy import RefreshPolicyDescriptor

__all__ = [
    "SchemaSnapshot",
    "SnapshotObject",
    "Dimension",
    "HypertableDescriptor",
    "effective_compression",
    "ReorderPolicyDescriptor",
    "AggregateFunction",
    "ContinuousAggregateDescriptor",
    "RefreshPolicyDescriptor",
]
