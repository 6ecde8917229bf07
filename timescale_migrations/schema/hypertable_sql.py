# ============================================================================
# HYPERTABLE SQL GENERATOR
# ============================================================================
# STATUS: Core - Statement generation for hypertable operations
# PURPOSE: create_hypertable, compression, chunk skipping and dimension calls
# CREATED: 18 OCT 2026
# EXPORTS: HypertableSqlGenerator
# DEPENDENCIES: psycopg (via ddl_utils)
# ============================================================================
"""
Hypertable SQL Generator.

Statement order for a create:
    1. create_hypertable(...)
    2. One edition-guarded DO block for compression and chunk skipping
       (Community Edition features)
    3. add_dimension(...) per additional dimension (both editions)

Alter follows the same order: set_chunk_time_interval, the guarded block,
then added dimensions and a warning comment for dimensions that can no
longer be removed.
"""

from typing import List, Optional, Sequence

from timescale_migrations.contracts import DimensionType, QuoteMode
from timescale_migrations.logging import get_logger, log_context
from timescale_migrations.models.hypertable import Dimension, effective_compression
from timescale_migrations.operations.hypertable import (
    AlterHypertableOperation,
    CreateHypertableOperation,
)
from timescale_migrations.schema.ddl_utils import SqlBuilderHelper, wrap_community_features

logger = get_logger("schema.hypertable_sql")


class HypertableSqlGenerator:
    """
    Generate TimescaleDB statements for hypertable operations.

    Args:
        quote_mode: RUNTIME for direct execution, SCRIPT for embedding in
                    a generated migration file
    """

    def __init__(self, quote_mode: QuoteMode = QuoteMode.RUNTIME):
        self.helper = SqlBuilderHelper(quote_mode)

    def generate(self, operation) -> List[str]:
        if isinstance(operation, CreateHypertableOperation):
            return self.generate_create(operation)
        if isinstance(operation, AlterHypertableOperation):
            return self.generate_alter(operation)
        raise TypeError(f"HypertableSqlGenerator cannot handle {type(operation).__name__}")

    # ========================================================================
    # CREATE
    # ========================================================================

    def generate_create(self, operation: CreateHypertableOperation) -> List[str]:
        regclass = self.helper.regclass(operation.table_name, operation.schema_name)
        statements = [self._create_hypertable_sql(operation, regclass)]

        community: List[str] = []

        settings: List[str] = []
        if operation.effective_compression:
            settings.append("timescaledb.compress = true")
        if operation.compression_segment_by:
            settings.append(
                f"timescaledb.compress_segmentby = {self._segment_by_value(operation.compression_segment_by)}"
            )
        if operation.compression_order_by:
            settings.append(
                f"timescaledb.compress_orderby = {self._order_by_value(operation.compression_order_by)}"
            )
        if settings:
            community.append(self._alter_table_set_sql(operation, settings))

        if operation.chunk_skip_columns:
            community.extend(self._enable_chunk_skipping_sql(regclass, operation.chunk_skip_columns))

        if community:
            statements.append(wrap_community_features(community))

        for dimension in operation.additional_dimensions or []:
            statements.append(self._add_dimension_sql(regclass, dimension))

        return statements

    def _create_hypertable_sql(self, operation: CreateHypertableOperation, regclass: str) -> str:
        parts = [
            f"SELECT create_hypertable({regclass}, {self.helper.literal(operation.time_column_name)}"
        ]
        if operation.migrate_data:
            parts.append(", migrate_data => true")
        if operation.chunk_time_interval:
            interval = self.helper.interval(operation.chunk_time_interval, integer_cast="bigint")
            parts.append(f", chunk_time_interval => {interval}")
        parts.append(");")
        return "".join(parts)

    # ========================================================================
    # ALTER
    # ========================================================================

    def generate_alter(self, operation: AlterHypertableOperation) -> List[str]:
        regclass = self.helper.regclass(operation.table_name, operation.schema_name)
        statements: List[str] = []
        community: List[str] = []

        if operation.chunk_time_interval != operation.old_chunk_time_interval:
            interval = self.helper.interval(operation.chunk_time_interval, integer_cast="bigint")
            statements.append(f"SELECT set_chunk_time_interval({regclass}, {interval});")

        # Compression settings
        new_compression = effective_compression(
            operation.enable_compression,
            operation.chunk_skip_columns,
            operation.compression_segment_by,
            operation.compression_order_by,
        )
        old_compression = effective_compression(
            operation.old_enable_compression,
            operation.old_chunk_skip_columns,
            operation.old_compression_segment_by,
            operation.old_compression_order_by,
        )

        settings: List[str] = []
        if new_compression != old_compression:
            settings.append(f"timescaledb.compress = {self.helper.boolean(new_compression)}")
        if _ordered_changed(operation.old_compression_segment_by, operation.compression_segment_by):
            value = (
                self._segment_by_value(operation.compression_segment_by)
                if operation.compression_segment_by else "''"
            )
            settings.append(f"timescaledb.compress_segmentby = {value}")
        if _ordered_changed(operation.old_compression_order_by, operation.compression_order_by):
            value = (
                self._order_by_value(operation.compression_order_by)
                if operation.compression_order_by else "''"
            )
            settings.append(f"timescaledb.compress_orderby = {value}")
        if settings:
            community.append(self._alter_table_set_sql(operation, settings))

        # Chunk skipping
        new_columns = operation.chunk_skip_columns or []
        old_columns = operation.old_chunk_skip_columns or []
        added_columns = [c for c in new_columns if c not in old_columns]
        removed_columns = [c for c in old_columns if c not in new_columns]

        if added_columns:
            community.extend(self._enable_chunk_skipping_sql(regclass, added_columns))
        for column in removed_columns:
            community.append(
                f"SELECT disable_chunk_skipping({regclass}, {self.helper.literal(column)});"
            )

        if community:
            statements.append(wrap_community_features(community))

        # Dimensions are append-only
        new_dimensions = operation.additional_dimensions or []
        old_dimensions = operation.old_additional_dimensions or []

        for dimension in new_dimensions:
            if not any(_same_dimension(dimension, old) for old in old_dimensions):
                statements.append(self._add_dimension_sql(regclass, dimension))

        removed_dimensions = [
            old for old in old_dimensions
            if not any(
                old.column_name == new.column_name and old.type == new.type
                for new in new_dimensions
            )
        ]
        if removed_dimensions:
            names = ", ".join(self.helper.literal(d.column_name) for d in removed_dimensions)
            with log_context(table=operation.table_name):
                logger.warning(
                    "Ignoring removal of hypertable dimensions",
                    extra={"dimensions": [d.column_name for d in removed_dimensions]},
                )
            statements.append(
                "-- WARNING: TimescaleDB does not support removing dimensions. "
                f"The following dimensions cannot be removed: {names}"
            )

        return statements

    # ========================================================================
    # SHARED BUILDERS
    # ========================================================================

    def _alter_table_set_sql(self, operation, settings: List[str]) -> str:
        table = self.helper.qualified_identifier(operation.table_name, operation.schema_name)
        return f"ALTER TABLE {table} SET ({', '.join(settings)});"

    def _enable_chunk_skipping_sql(self, regclass: str, columns: Sequence[str]) -> List[str]:
        statements = ["SET timescaledb.enable_chunk_skipping = 'ON';"]
        for column in columns:
            statements.append(
                f"SELECT enable_chunk_skipping({regclass}, {self.helper.literal(column)});"
            )
        return statements

    def _add_dimension_sql(self, regclass: str, dimension: Dimension) -> str:
        column = self.helper.literal(dimension.column_name)
        if dimension.type == DimensionType.HASH:
            builder = f"by_hash({column}, {dimension.number_of_partitions})"
        else:
            builder = f"by_range({column}, {self.helper.interval(dimension.interval)})"
        return f"SELECT add_dimension({regclass}, {builder});"

    def _segment_by_value(self, columns: Sequence[str]) -> str:
        return self.helper.literal(self.helper.column_list(columns))

    def _order_by_value(self, clauses: Sequence[str]) -> str:
        # "Timestamp DESC" -> "\"Timestamp\" DESC"
        rendered = []
        for clause in clauses:
            column, _, suffix = clause.strip().partition(" ")
            quoted = self.helper.identifier(column)
            rendered.append(f"{quoted} {suffix.strip()}" if suffix.strip() else quoted)
        return self.helper.literal(", ".join(rendered))


def _ordered_changed(old: Optional[List[str]], new: Optional[List[str]]) -> bool:
    return list(old or []) != list(new or [])


def _same_dimension(a: Dimension, b: Dimension) -> bool:
    return (
        a.column_name == b.column_name
        and a.type == b.type
        and a.interval == b.interval
        and a.number_of_partitions == b.number_of_partitions
    )


__all__ = ["HypertableSqlGenerator"]
