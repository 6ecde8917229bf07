# ============================================================================
# CONTINUOUS AGGREGATE SQL GENERATOR
# ============================================================================
# STATUS: Core - Statement generation for continuous aggregate operations
# PURPOSE: CREATE / ALTER / DROP MATERIALIZED VIEW ... WITH (timescaledb.continuous)
# CREATED: 18 OCT 2026
# EXPORTS: ContinuousAggregateSqlGenerator, is_raw_expression
# DEPENDENCIES: psycopg (via ddl_utils)
# ============================================================================
"""
Continuous Aggregate SQL Generator.

Create builds a single multi-line statement:

    CREATE MATERIALIZED VIEW "public"."hourly"
    WITH (timescaledb.continuous, timescaledb.create_group_indexes = false, ...) AS
    SELECT time_bucket('1 hour', "Timestamp") AS time_bucket, ...
    FROM "public"."Metrics"
    WHERE ...
    GROUP BY time_bucket, ...
    WITH NO DATA;

The parent table is qualified with the view's schema.

Alter emits one ALTER MATERIALIZED VIEW ... SET per changed option.
TimescaleDB has no RESET for chunk_interval, so clearing it re-applies the
last known value.
"""

from typing import List

from timescale_migrations.contracts import AggregateFunctionType, QuoteMode
from timescale_migrations.models.continuous_aggregate import AggregateFunction
from timescale_migrations.operations.continuous_aggregate import (
    AlterContinuousAggregateOperation,
    CreateContinuousAggregateOperation,
    DropContinuousAggregateOperation,
)
from timescale_migrations.schema.ddl_utils import SqlBuilderHelper


SQL_AGGREGATE_FUNCTIONS = {
    AggregateFunctionType.AVG: "AVG",
    AggregateFunctionType.MAX: "MAX",
    AggregateFunctionType.MIN: "MIN",
    AggregateFunctionType.SUM: "SUM",
    AggregateFunctionType.COUNT: "COUNT",
    AggregateFunctionType.FIRST: "first",
    AggregateFunctionType.LAST: "last",
}


def is_raw_expression(entry: str) -> bool:
    """Group-by entries with a comma, parenthesis or space are SQL, not column names."""
    return "," in entry or "(" in entry or " " in entry


class ContinuousAggregateSqlGenerator:
    """
    Generate statements for continuous aggregate operations.

    Args:
        quote_mode: Identifier escaping style
    """

    def __init__(self, quote_mode: QuoteMode = QuoteMode.RUNTIME):
        self.helper = SqlBuilderHelper(quote_mode)

    def generate(self, operation) -> List[str]:
        if isinstance(operation, CreateContinuousAggregateOperation):
            return self.generate_create(operation)
        if isinstance(operation, AlterContinuousAggregateOperation):
            return self.generate_alter(operation)
        if isinstance(operation, DropContinuousAggregateOperation):
            return self.generate_drop(operation)
        raise TypeError(
            f"ContinuousAggregateSqlGenerator cannot handle {type(operation).__name__}"
        )

    # ========================================================================
    # CREATE
    # ========================================================================

    def generate_create(self, operation: CreateContinuousAggregateOperation) -> List[str]:
        """
        Build the CREATE MATERIALIZED VIEW statement.

        Raises:
            UnsupportedAggregateFunctionError: An aggregate names an unknown function
        """
        h = self.helper
        view = h.qualified_identifier(operation.materialized_view_name, operation.schema_name)
        parent = h.qualified_identifier(operation.parent_name, operation.schema_name)
        group_by_columns = operation.group_by_columns or []

        with_options = [
            "timescaledb.continuous",
            f"timescaledb.create_group_indexes = {h.boolean(operation.create_group_indexes)}",
            f"timescaledb.materialized_only = {h.boolean(operation.materialized_only)}",
        ]
        if operation.chunk_interval:
            with_options.append(f"timescaledb.chunk_interval = {h.literal(operation.chunk_interval)}")

        time_column = h.identifier(operation.time_bucket_source_column)
        select_list = [
            f"time_bucket({h.literal(operation.time_bucket_width)}, {time_column}) AS time_bucket"
        ]
        for entry in group_by_columns:
            if not is_raw_expression(entry):
                select_list.append(h.identifier(entry))
        for aggregate in operation.aggregate_functions or []:
            select_list.append(self._aggregate_expression(aggregate, time_column))

        group_by_list = []
        if operation.time_bucket_group_by:
            group_by_list.append("time_bucket")
        for entry in group_by_columns:
            group_by_list.append(entry if is_raw_expression(entry) else h.identifier(entry))

        lines = [
            f"CREATE MATERIALIZED VIEW {view}",
            f"WITH ({', '.join(with_options)}) AS",
            f"SELECT {', '.join(select_list)}",
            f"FROM {parent}",
        ]
        if operation.where_clause and operation.where_clause.strip():
            lines.append(f"WHERE {operation.where_clause.replace(chr(34), h.quote)}")
        if group_by_list:
            lines.append(f"GROUP BY {', '.join(group_by_list)}")
        if operation.with_no_data:
            lines.append("WITH NO DATA")

        return ["\n".join(lines) + ";"]

    def _aggregate_expression(self, aggregate: AggregateFunction, time_column: str) -> str:
        function_type = aggregate.function_type
        sql_function = SQL_AGGREGATE_FUNCTIONS[function_type]
        source = self.helper.identifier(aggregate.source_column)
        alias = self.helper.identifier(aggregate.alias)
        if function_type.is_time_ordered():
            return f"{sql_function}({source}, {time_column}) AS {alias}"
        return f"{sql_function}({source}) AS {alias}"

    # ========================================================================
    # ALTER / DROP
    # ========================================================================

    def generate_alter(self, operation: AlterContinuousAggregateOperation) -> List[str]:
        h = self.helper
        view = h.qualified_identifier(operation.materialized_view_name, operation.schema_name)
        statements = []

        if operation.chunk_interval != operation.old_chunk_interval:
            value = operation.chunk_interval or operation.old_chunk_interval
            if value:
                statements.append(
                    f"ALTER MATERIALIZED VIEW {view} SET (timescaledb.chunk_interval = {h.literal(value)});"
                )

        if operation.create_group_indexes != operation.old_create_group_indexes:
            statements.append(
                f"ALTER MATERIALIZED VIEW {view} SET "
                f"(timescaledb.create_group_indexes = {h.boolean(operation.create_group_indexes)});"
            )

        if operation.materialized_only != operation.old_materialized_only:
            statements.append(
                f"ALTER MATERIALIZED VIEW {view} SET "
                f"(timescaledb.materialized_only = {h.boolean(operation.materialized_only)});"
            )

        return statements

    def generate_drop(self, operation: DropContinuousAggregateOperation) -> List[str]:
        view = self.helper.qualified_identifier(operation.materialized_view_name, operation.schema_name)
        return [f"DROP MATERIALIZED VIEW IF EXISTS {view};"]


__all__ = ["ContinuousAggregateSqlGenerator", "SQL_AGGREGATE_FUNCTIONS", "is_raw_expression"]
