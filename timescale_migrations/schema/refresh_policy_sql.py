# ============================================================================
# REFRESH POLICY SQL GENERATOR
# ============================================================================
# STATUS: Core - Statement generation for refresh policy operations
# PURPOSE: add_continuous_aggregate_policy / remove_continuous_aggregate_policy
# CREATED: 18 OCT 2026
# EXPORTS: RefreshPolicySqlGenerator
# DEPENDENCIES: psycopg (via ddl_utils)
# ============================================================================
"""
Refresh Policy SQL Generator.

start_offset and end_offset are always passed (NULL means an open-ended
window). Every other argument is only passed when it is set or differs
from the TimescaleDB default.
"""

from typing import List, Optional

from timescale_migrations.config import TimescaleDefaults, get_defaults
from timescale_migrations.contracts import QuoteMode
from timescale_migrations.operations.refresh_policy import (
    AddContinuousAggregatePolicyOperation,
    RemoveContinuousAggregatePolicyOperation,
)
from timescale_migrations.schema.ddl_utils import SqlBuilderHelper


class RefreshPolicySqlGenerator:
    """
    Generate statements for continuous aggregate refresh policies.

    Args:
        quote_mode: Identifier escaping style
        defaults: Batch and ordering defaults; equal values are not emitted
    """

    def __init__(
        self,
        quote_mode: QuoteMode = QuoteMode.RUNTIME,
        defaults: Optional[TimescaleDefaults] = None,
    ):
        self.helper = SqlBuilderHelper(quote_mode)
        self.defaults = defaults or get_defaults()

    def generate(self, operation) -> List[str]:
        if isinstance(operation, AddContinuousAggregatePolicyOperation):
            return self.generate_add(operation)
        if isinstance(operation, RemoveContinuousAggregatePolicyOperation):
            return self.generate_remove(operation)
        raise TypeError(f"RefreshPolicySqlGenerator cannot handle {type(operation).__name__}")

    def generate_add(self, operation: AddContinuousAggregatePolicyOperation) -> List[str]:
        h = self.helper
        d = self.defaults
        args = [
            h.regclass(operation.materialized_view_name, operation.schema_name),
            f"start_offset => {self._offset(operation.start_offset)}",
            f"end_offset => {self._offset(operation.end_offset)}",
        ]

        if operation.schedule_interval and operation.schedule_interval.strip():
            args.append(f"schedule_interval => INTERVAL {h.literal(operation.schedule_interval)}")
        if operation.if_not_exists:
            args.append("if_not_exists => true")
        if operation.timezone and operation.timezone.strip():
            args.append(f"timezone => {h.literal(operation.timezone)}")
        if operation.include_tiered_data is not None:
            args.append(f"include_tiered_data => {h.boolean(operation.include_tiered_data)}")
        if operation.buckets_per_batch != d.refresh_buckets_per_batch:
            args.append(f"buckets_per_batch => {operation.buckets_per_batch}")
        if operation.max_batches_per_execution != d.refresh_max_batches_per_execution:
            args.append(f"max_batches_per_execution => {operation.max_batches_per_execution}")
        if operation.refresh_newest_first != d.refresh_newest_first:
            args.append(f"refresh_newest_first => {h.boolean(operation.refresh_newest_first)}")
        if operation.initial_start is not None:
            args.append(f"initial_start => {h.timestamp(operation.initial_start)}")

        return [f"SELECT add_continuous_aggregate_policy({', '.join(args)});"]

    def generate_remove(self, operation: RemoveContinuousAggregatePolicyOperation) -> List[str]:
        args = [self.helper.regclass(operation.materialized_view_name, operation.schema_name)]
        if operation.if_exists:
            args.append("if_exists => true")
        return [f"SELECT remove_continuous_aggregate_policy({', '.join(args)});"]

    def _offset(self, value: Optional[str]) -> str:
        if value is None:
            return "NULL"
        return self.helper.interval(value)


__all__ = ["RefreshPolicySqlGenerator"]
