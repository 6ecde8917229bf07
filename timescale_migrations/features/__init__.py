"""
Per-feature descriptor extraction and diffing.
"""

from timescale_migrations.features.base import FeatureDiffer
from timescale_migrations.features.extractors import (
    extract_continuous_aggregates,
    extract_hypertables,
    extract_refresh_policies,
    extract_reorder_policies,
)
from timescale_migrations.features.hypertable_differ import HypertableDiffer
from timescale_migrations.features.reorder_policy_differ import ReorderPolicyDiffer
from timescale_migrations.features.continuous_aggregate_differ import ContinuousAggregateDiffer

__all__ = [
    "FeatureDiffer",
    "extract_hypertables",
    "extract_reorder_policies",
    "extract_continuous_aggregates",
    "extract_refresh_policies",
    "HypertableDiffer",
    "ReorderPolicyDiffer",
    "ContinuousAggregateDiffer",
]
