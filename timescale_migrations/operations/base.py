# ============================================================================
# MIGRATION OPERATION BASE
# ============================================================================
# STATUS: Core - Operation record base class
# PURPOSE: Shared base for every operation placed in the migration list
# CREATED: 18 OCT 2026
# ============================================================================
"""
Operation base classes.

MigrationOperation is the common base of everything the differs emit and
the host pipeline's own operations. CreateTableOperation is the host's
table-creation record; the orchestrator only reads its name to position
hypertable creation right after it.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MigrationOperation(BaseModel):
    """Immutable record of one migration step."""

    model_config = {"frozen": True}

    @property
    def operation_name(self) -> str:
        return type(self).__name__

    @property
    def object_name(self) -> Optional[str]:
        """Table or view the operation targets, for logging."""
        for attribute in ("table_name", "materialized_view_name", "name"):
            value = getattr(self, attribute, None)
            if value:
                return value
        return None


class CreateTableOperation(MigrationOperation):
    """Table creation emitted by the host's table differ."""

    name: str = Field(..., min_length=1)
    schema_name: Optional[str] = None


__all__ = ["MigrationOperation", "CreateTableOperation"]
