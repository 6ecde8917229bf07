# ============================================================================
# MIGRATION SERVICE
# ============================================================================
# STATUS: Service - Orchestrates feature differs and SQL generators
# PURPOSE: Merge feature operations into the host operation list and emit SQL
# CREATED: 18 OCT 2026
# EXPORTS: MigrationService, StatementSink, ListStatementSink, StatementBatch, SqlGenerator
# ============================================================================
"""
Migration Service

Invoked once per migration build:

    1. get_differences(source, target, operations)
       Runs the hypertable, reorder policy and continuous aggregate differs.
       Hypertable creation is inserted right after the CreateTableOperation
       of the same table; everything else is appended.

    2. emit(operations, sink)
       Generates statements for every feature operation and hands each
       operation's statements to the sink as one batch. Creating a
       continuous aggregate is not allowed inside a transaction block, so
       that batch is flagged suppress_transaction=True.

Operations this service has no generator for (the host's own table
operations) are left to the host during emit; generate() rejects them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from timescale_migrations.config import TimescaleDefaults, get_defaults
from timescale_migrations.contracts import QuoteMode
from timescale_migrations.exceptions import UnsupportedOperationError
from timescale_migrations.features.base import FeatureDiffer
from timescale_migrations.features.continuous_aggregate_differ import ContinuousAggregateDiffer
from timescale_migrations.features.hypertable_differ import HypertableDiffer
from timescale_migrations.features.reorder_policy_differ import ReorderPolicyDiffer
from timescale_migrations.logging import get_logger, log_context
from timescale_migrations.models.snapshot import SchemaSnapshot
from timescale_migrations.operations import (
    AddContinuousAggregatePolicyOperation,
    AddReorderPolicyOperation,
    AlterContinuousAggregateOperation,
    AlterHypertableOperation,
    AlterReorderPolicyOperation,
    CreateContinuousAggregateOperation,
    CreateHypertableOperation,
    CreateTableOperation,
    DropContinuousAggregateOperation,
    DropReorderPolicyOperation,
    MigrationOperation,
    RemoveContinuousAggregatePolicyOperation,
)
from timescale_migrations.schema import (
    ContinuousAggregateSqlGenerator,
    HypertableSqlGenerator,
    RefreshPolicySqlGenerator,
    ReorderPolicySqlGenerator,
)

logger = get_logger("services.migration_service")


# ============================================================================
# GENERATOR AND SINK PROTOCOLS
# ============================================================================

class SqlGenerator(Protocol):
    """Turns one feature operation into ordered statements."""

    def generate(self, operation: MigrationOperation) -> List[str]:
        ...


class StatementSink(Protocol):
    """Receives ordered statement batches; owns transactions and execution."""

    def add_batch(self, statements: List[str], suppress_transaction: bool = False) -> None:
        ...


@dataclass
class StatementBatch:
    statements: List[str]
    suppress_transaction: bool = False


@dataclass
class ListStatementSink:
    """Sink that collects batches in memory."""

    batches: List[StatementBatch] = field(default_factory=list)

    def add_batch(self, statements: List[str], suppress_transaction: bool = False) -> None:
        self.batches.append(StatementBatch(list(statements), suppress_transaction))

    @property
    def statements(self) -> List[str]:
        """All statements in emission order."""
        return [s for batch in self.batches for s in batch.statements]


# ============================================================================
# SERVICE
# ============================================================================

class MigrationService:
    """
    Feature-aware migration orchestrator.

    Args:
        quote_mode: Identifier escaping style passed to every generator
        defaults: Named defaults shared by extractors, differs and generators
    """

    def __init__(
        self,
        quote_mode: QuoteMode = QuoteMode.RUNTIME,
        defaults: Optional[TimescaleDefaults] = None,
    ):
        self.quote_mode = quote_mode
        self.defaults = defaults or get_defaults()

        self.differs: List[FeatureDiffer] = [
            HypertableDiffer(self.defaults),
            ReorderPolicyDiffer(self.defaults),
            ContinuousAggregateDiffer(self.defaults),
        ]

        hypertables = HypertableSqlGenerator(quote_mode)
        reorder_policies = ReorderPolicySqlGenerator(quote_mode, self.defaults)
        aggregates = ContinuousAggregateSqlGenerator(quote_mode)
        refresh_policies = RefreshPolicySqlGenerator(quote_mode, self.defaults)

        # Operation type -> generator; each generator dispatches on the operation
        self._generators: Dict[type, SqlGenerator] = {
            CreateHypertableOperation: hypertables,
            AlterHypertableOperation: hypertables,
            AddReorderPolicyOperation: reorder_policies,
            AlterReorderPolicyOperation: reorder_policies,
            DropReorderPolicyOperation: reorder_policies,
            CreateContinuousAggregateOperation: aggregates,
            AlterContinuousAggregateOperation: aggregates,
            DropContinuousAggregateOperation: aggregates,
            AddContinuousAggregatePolicyOperation: refresh_policies,
            RemoveContinuousAggregatePolicyOperation: refresh_policies,
        }

    # ========================================================================
    # DIFF
    # ========================================================================

    def get_differences(
        self,
        source: Optional[SchemaSnapshot],
        target: Optional[SchemaSnapshot],
        operations: Optional[List[MigrationOperation]] = None,
        migration_id: Optional[str] = None,
    ) -> List[MigrationOperation]:
        """
        Merge feature operations into the host operation list.

        Args:
            source: Current schema snapshot (None is treated as empty)
            target: Desired schema snapshot (None is treated as empty)
            operations: Host operation list, modified in place
            migration_id: Optional id added to the logging context

        Returns:
            The operation list (the same object when one was passed)
        """
        if operations is None:
            operations = []

        with log_context(migration_id=migration_id):
            added = 0
            for differ in self.differs:
                for operation in differ.get_differences(source, target):
                    if isinstance(operation, CreateHypertableOperation):
                        _insert_after_table(operations, operation)
                    else:
                        operations.append(operation)
                    added += 1

            logger.info(
                "Feature differences computed",
                extra={"feature_operations": added, "total_operations": len(operations)},
            )

        return operations

    # ========================================================================
    # GENERATE / EMIT
    # ========================================================================

    def handles(self, operation: MigrationOperation) -> bool:
        return self._find_generator(operation) is not None

    def generate(self, operation: MigrationOperation) -> List[str]:
        """
        Generate the statements for one feature operation.

        Raises:
            UnsupportedOperationError: No generator for this operation type
        """
        generator = self._find_generator(operation)
        if generator is None:
            raise UnsupportedOperationError(operation)
        with log_context(operation=operation.operation_name, table=operation.object_name):
            statements = generator.generate(operation)
            logger.debug("Generated statements", extra={"count": len(statements)})
        return statements

    def emit(self, operations: List[MigrationOperation], sink: StatementSink) -> None:
        """Write each feature operation's statements to the sink as one batch."""
        for operation in operations:
            if not self.handles(operation):
                continue
            statements = self.generate(operation)
            if not statements:
                continue
            sink.add_batch(
                statements,
                suppress_transaction=isinstance(operation, CreateContinuousAggregateOperation),
            )

    def generate_all(self, operations: List[MigrationOperation]) -> List[str]:
        """Statements for every feature operation, in order."""
        sink = ListStatementSink()
        self.emit(operations, sink)
        return sink.statements

    def _find_generator(self, operation) -> Optional[SqlGenerator]:
        for cls in type(operation).__mro__:
            generator = self._generators.get(cls)
            if generator is not None:
                return generator
        return None


def _insert_after_table(
    operations: List[MigrationOperation],
    operation: CreateHypertableOperation,
) -> None:
    for index, existing in enumerate(operations):
        if isinstance(existing, CreateTableOperation) and existing.name == operation.table_name:
            operations.insert(index + 1, operation)
            return
    operations.append(operation)


__all__ = ["MigrationService", "StatementSink", "StatementBatch", "ListStatementSink", "SqlGenerator"]
