"""
SQL generation for TimescaleDB feature operations.

Each generator turns one operation into an ordered list of statement
strings; ddl_utils holds the shared quoting helpers.
"""

from timescale_migrations.schema.ddl_utils import SqlBuilderHelper, wrap_community_features
from timescale_migrations.schema.hypertable_sql import HypertableSqlGenerator
from timescale_migrations.schema.reorder_policy_sql import ReorderPolicySqlGenerator
from timescale_migrations.schema.continuous_aggregate_sql import ContinuousAggregateSqlGenerator
from timescale_migrations.schema.refresh_policy_sql import RefreshPolicySqlGenerator

__all__ = [
    "SqlBuilderHelper",
    "wrap_community_features",
    "HypertableSqlGenerator",
    "ReorderPolicySqlGenerator",
    "ContinuousAggregateSqlGenerator",
    "RefreshPolicySqlGenerator",
]
