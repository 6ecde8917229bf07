# ============================================================================
# REFRESH POLICY OPERATIONS
# ============================================================================
# STATUS: Core - Continuous aggregate refresh policy add/remove records
# PURPOSE: Carry refresh policy definitions to the SQL generator
# CREATED: 18 OCT 2026
# ============================================================================
"""Continuous aggregate refresh policy operations."""

from pydantic import Field

from timescale_migrations.models.refresh_policy import RefreshPolicyDescriptor
from timescale_migrations.operations.base import MigrationOperation


class AddContinuousAggregatePolicyOperation(RefreshPolicyDescriptor, MigrationOperation):
    """Attach a refresh policy to a continuous aggregate."""

    @classmethod
    def from_descriptor(
        cls, descriptor: RefreshPolicyDescriptor
    ) -> "AddContinuousAggregatePolicyOperation":
        return cls(**descriptor.model_dump())


class RemoveContinuousAggregatePolicyOperation(MigrationOperation):
    """Remove the refresh policy of a continuous aggregate."""

    materialized_view_name: str = Field(..., min_length=1)
    schema_name: str = "public"
    if_exists: bool = False


__all__ = [
    "AddContinuousAggregatePolicyOperation",
    "RemoveContinuousAggregatePolicyOperation",
]
