"""
Migration operation records.

Create/Add operations inherit the descriptor they carry; Alter operations
pair every changeable field with an old_ value.
"""

from timescale_migrations.operations.base import CreateTableOperation, MigrationOperation
from timescale_migrations.operations.hypertable import (
    AlterHypertableOperation,
    CreateHypertableOperation,
)
from timescale_migrations.operations.reorder_policy import (
    AddReorderPolicyOperation,
    AlterReorderPolicyOperation,
    DropReorderPolicyOperation,
)
from timescale_migrations.operations.continuous_aggregate import (
    AlterContinuousAggregateOperation,
    CreateContinuousAggregateOperation,
    DropContinuousAggregateOperation,
)
from timescale_migrations.operations.refresh_policy import (
    AddContinuousAggregatePolicyOperation,
    RemoveContinuousAggregatePolicyOperation,
)

__all__ = [
    "MigrationOperation",
    "CreateTableOperation",
    "CreateHypertableOperation",
    "AlterHypertableOperation",
    "AddReorderPolicyOperation",
    "AlterReorderPolicyOperation",
    "DropReorderPolicyOperation",
    "CreateContinuousAggregateOperation",
    "AlterContinuousAggregateOperation",
    "DropContinuousAggregateOperation",
    "AddContinuousAggregatePolicyOperation",
    "RemoveContinuousAggregatePolicyOperation",
]
