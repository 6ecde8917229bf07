# ============================================================================
# SCHEMA SNAPSHOT
# ============================================================================
# STATUS: Core - Read-only snapshot shape consumed by the extractors
# PURPOSE: Per-object name, table name, schema and annotation metadata
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema snapshot models.

A snapshot is the host pipeline's materialized view of a schema: one
SnapshotObject per table or view, each with a string-keyed metadata store
holding the TimescaleDB:* annotations.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SnapshotObject(BaseModel):
    """
    One table or view in a schema snapshot.

    name is the logical (model) name; table_name is the database name,
    which continuous aggregates leave empty.
    """

    name: str = Field(..., min_length=1)
    table_name: Optional[str] = None
    schema_name: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def get(self, key: str, default: Any = None) -> Any:
        """Read one annotation, returning default when absent or None."""
        value = self.metadata.get(key)
        return default if value is None else value

    def has(self, key: str) -> bool:
        return self.metadata.get(key) is not None


class SchemaSnapshot(BaseModel):
    """Ordered collection of snapshot objects."""

    objects: List[SnapshotObject] = Field(default_factory=list)

    model_config = {"frozen": True}

    def find(self, name: str) -> Optional[SnapshotObject]:
        """Look up an object by logical name, falling back to table name."""
        for obj in self.objects:
            if obj.name == name:
                return obj
        for obj in self.objects:
            if obj.table_name == name:
                return obj
        return None


__all__ = ["SnapshotObject", "SchemaSnapshot"]
