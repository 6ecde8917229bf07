"""
Orchestration services.
"""

from timescale_migrations.services.migration_service import (
    ListStatementSink,
    MigrationService,
    StatementBatch,
    StatementSink,
)

__all__ = [
    "MigrationService",
    "StatementSink",
    "StatementBatch",
    "ListStatementSink",
]
