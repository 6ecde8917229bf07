"""
TimescaleDB feature engine for schema migrations.

Diffs hypertables, reorder policies and continuous aggregates between two
schema snapshots and turns the resulting operations into TimescaleDB SQL.

Usage:
    from timescale_migrations import MigrationService, SchemaSnapshot

    service = MigrationService()
    operations = service.get_differences(source_snapshot, target_snapshot, host_operations)
    statements = service.generate_all(operations)
"""

from timescale_migrations.__version__ import __version__
from timescale_migrations.config import TimescaleDefaults, get_defaults
from timescale_migrations.contracts import AggregateFunctionType, DimensionType, QuoteMode
from timescale_migrations.exceptions import (
    ConfigurationError,
    TimescaleMigrationError,
    UnsupportedAggregateFunctionError,
    UnsupportedOperationError,
)
from timescale_migrations.logging import configure_logging, get_logger
from timescale_migrations.models import (
    AggregateFunction,
    ContinuousAggregateDescriptor,
    Dimension,
    HypertableDescriptor,
    RefreshPolicyDescriptor,
    ReorderPolicyDescriptor,
    SchemaSnapshot,
    SnapshotObject,
)
from timescale_migrations.services import ListStatementSink, MigrationService, StatementSink

__all__ = [
    "__version__",
    "TimescaleDefaults",
    "get_defaults",
    "AggregateFunctionType",
    "DimensionType",
    "QuoteMode",
    "TimescaleMigrationError",
    "ConfigurationError",
    "UnsupportedAggregateFunctionError",
    "UnsupportedOperationError",
    "configure_logging",
    "get_logger",
    "AggregateFunction",
    "ContinuousAggregateDescriptor",
    "Dimension",
    "HypertableDescriptor",
    "RefreshPolicyDescriptor",
    "ReorderPolicyDescriptor",
    "SchemaSnapshot",
    "SnapshotObject",
    "MigrationService",
    "StatementSink",
    "ListStatementSink",
]
