# ============================================================================
# REORDER POLICY SQL GENERATOR
# ============================================================================
# STATUS: Core - Statement generation for reorder policy operations
# PURPOSE: add_reorder_policy, alter_job and remove_reorder_policy calls
# CREATED: 18 OCT 2026
# EXPORTS: ReorderPolicySqlGenerator
# DEPENDENCIES: psycopg (via ddl_utils)
# ============================================================================
"""
Reorder Policy SQL Generator.

add_reorder_policy() only takes the index and start time; the job
settings (schedule interval, max runtime, retries, retry period) are
applied afterwards with alter_job() against timescaledb_information.jobs.

Changing the index or the start time changes the job's identity, so the
alter path removes the policy, adds it again and re-applies every
non-default job setting of the desired state.
"""

from typing import List, Optional

from timescale_migrations.config import TimescaleDefaults, get_defaults
from timescale_migrations.contracts import QuoteMode
from timescale_migrations.logging import get_logger, log_context
from timescale_migrations.operations.reorder_policy import (
    AddReorderPolicyOperation,
    AlterReorderPolicyOperation,
    DropReorderPolicyOperation,
)
from timescale_migrations.schema.ddl_utils import SqlBuilderHelper

logger = get_logger("schema.reorder_policy_sql")


class ReorderPolicySqlGenerator:
    """
    Generate TimescaleDB statements for reorder policy operations.

    Args:
        quote_mode: Identifier escaping style
        defaults: Job-setting defaults; values equal to these are not emitted
    """

    def __init__(
        self,
        quote_mode: QuoteMode = QuoteMode.RUNTIME,
        defaults: Optional[TimescaleDefaults] = None,
    ):
        self.helper = SqlBuilderHelper(quote_mode)
        self.defaults = defaults or get_defaults()

    def generate(self, operation) -> List[str]:
        if isinstance(operation, AddReorderPolicyOperation):
            return self.generate_add(operation)
        if isinstance(operation, AlterReorderPolicyOperation):
            return self.generate_alter(operation)
        if isinstance(operation, DropReorderPolicyOperation):
            return self.generate_drop(operation)
        raise TypeError(f"ReorderPolicySqlGenerator cannot handle {type(operation).__name__}")

    # ========================================================================
    # OPERATIONS
    # ========================================================================

    def generate_add(self, operation: AddReorderPolicyOperation) -> List[str]:
        statements = [self._add_policy_sql(operation)]
        clauses = self._non_default_clauses(operation)
        if clauses:
            statements.append(self._alter_job_sql(operation.table_name, operation.schema_name, clauses))
        return statements

    def generate_alter(self, operation: AlterReorderPolicyOperation) -> List[str]:
        if operation.requires_recreation:
            with log_context(table=operation.table_name):
                logger.debug(
                    "Reorder policy identity changed, recreating",
                    extra={"index": operation.index_name, "old_index": operation.old_index_name},
                )
            statements = self.generate_drop(operation)
            statements.extend(self.generate_add(operation.target_state()))
            return statements

        clauses = self._changed_clauses(operation)
        if not clauses:
            return []
        return [self._alter_job_sql(operation.table_name, operation.schema_name, clauses)]

    def generate_drop(self, operation) -> List[str]:
        regclass = self.helper.regclass(operation.table_name, operation.schema_name)
        return [f"SELECT remove_reorder_policy({regclass}, if_exists => true);"]

    # ========================================================================
    # BUILDERS
    # ========================================================================

    def _add_policy_sql(self, operation: AddReorderPolicyOperation) -> str:
        regclass = self.helper.regclass(operation.table_name, operation.schema_name)
        args = [regclass, self.helper.literal(operation.index_name)]
        if operation.initial_start is not None:
            args.append(f"initial_start => {self.helper.timestamp(operation.initial_start)}")
        return f"SELECT add_reorder_policy({', '.join(args)});"

    def _non_default_clauses(self, operation: AddReorderPolicyOperation) -> List[str]:
        d = self.defaults
        clauses = []
        if operation.schedule_interval and operation.schedule_interval != d.reorder_schedule_interval:
            clauses.append(f"schedule_interval => {self._interval(operation.schedule_interval)}")
        if operation.max_runtime and operation.max_runtime != d.reorder_max_runtime:
            clauses.append(f"max_runtime => {self._interval(operation.max_runtime)}")
        if operation.max_retries is not None and operation.max_retries != d.reorder_max_retries:
            clauses.append(f"max_retries => {operation.max_retries}")
        if operation.retry_period and operation.retry_period != d.reorder_retry_period:
            clauses.append(f"retry_period => {self._interval(operation.retry_period)}")
        return clauses

    def _changed_clauses(self, operation: AlterReorderPolicyOperation) -> List[str]:
        # A cleared setting returns the job to the configured default
        d = self.defaults
        clauses = []
        if operation.schedule_interval != operation.old_schedule_interval:
            value = operation.schedule_interval or d.reorder_schedule_interval
            clauses.append(f"schedule_interval => {self._interval(value)}")
        if operation.max_runtime != operation.old_max_runtime:
            # Cleared max_runtime means no limit
            value = self._interval(operation.max_runtime) if operation.max_runtime else "NULL"
            clauses.append(f"max_runtime => {value}")
        if operation.max_retries != operation.old_max_retries:
            retries = d.reorder_max_retries if operation.max_retries is None else operation.max_retries
            clauses.append(f"max_retries => {retries}")
        if operation.retry_period != operation.old_retry_period:
            value = operation.retry_period or d.reorder_retry_period
            clauses.append(f"retry_period => {self._interval(value)}")
        return clauses

    def _interval(self, value: str) -> str:
        return f"INTERVAL {self.helper.literal(value)}"

    def _alter_job_sql(self, table_name: str, schema_name: str, clauses: List[str]) -> str:
        # hypertable_schema/hypertable_name are name columns, compared as text
        return "\n".join([
            f"SELECT alter_job(job_id, {', '.join(clauses)})",
            "FROM timescaledb_information.jobs",
            "WHERE proc_name = 'policy_reorder' "
            f"AND hypertable_schema = {self.helper.literal(schema_name)} "
            f"AND hypertable_name = {self.helper.literal(table_name)};",
        ])


__all__ = ["ReorderPolicySqlGenerator"]
