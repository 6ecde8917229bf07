# ============================================================================
# CONTINUOUS AGGREGATE DESCRIPTORS
# ============================================================================
# STATUS: Core - Continuous aggregate value records
# PURPOSE: Time-bucketed materialized view definition
# CREATED: 18 OCT 2026
# ============================================================================
"""
Continuous aggregate descriptor models.

AggregateFunction
    One (alias, function, source_column) entry of the SELECT list. The
    function name is kept as written in the annotation and resolved to an
    AggregateFunctionType when SQL is generated, so an unknown name fails
    at generation time rather than at extraction.

ContinuousAggregateDescriptor
    The view definition. Fields split into structural ones (part of the
    view query, immutable once created) and alterable ones (WITH options).
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from timescale_migrations.contracts import AggregateFunctionType
from timescale_migrations.exceptions import UnsupportedAggregateFunctionError


class AggregateFunction(BaseModel):
    """One aggregate column of a continuous aggregate."""

    alias: str = Field(..., min_length=1)
    function: str = Field(..., min_length=1)
    source_column: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    @field_validator("function", mode="before")
    @classmethod
    def _enum_to_name(cls, value: Any) -> Any:
        if isinstance(value, AggregateFunctionType):
            return value.value
        return value

    @property
    def function_type(self) -> AggregateFunctionType:
        """
        Resolve the function name. Names match exactly ("Avg", not "avg").

        Raises:
            UnsupportedAggregateFunctionError: Name is not a known function
        """
        try:
            return AggregateFunctionType(self.function)
        except ValueError:
            raise UnsupportedAggregateFunctionError(self.function) from None

    @classmethod
    def parse(cls, text: str) -> Optional["AggregateFunction"]:
        """
        Parse the flat annotation form "alias:Function:column".

        Returns None when the text does not split into exactly three
        non-empty parts.
        """
        parts = text.split(":")
        if len(parts) != 3 or not all(part.strip() for part in parts):
            return None
        alias, function, source_column = (part.strip() for part in parts)
        return cls(alias=alias, function=function, source_column=source_column)

    def to_flat(self) -> str:
        return f"{self.alias}:{self.function}:{self.source_column}"


class ContinuousAggregateDescriptor(BaseModel):
    """Desired definition of one continuous aggregate."""

    materialized_view_name: str = Field(..., min_length=1)
    schema_name: str = "public"
    parent_name: str = Field(..., min_length=1)

    # Structural
    time_bucket_width: str = Field(..., min_length=1)
    time_bucket_source_column: str = Field(..., min_length=1)
    time_bucket_group_by: bool = True
    where_clause: Optional[str] = None
    aggregate_functions: Optional[List[AggregateFunction]] = None
    group_by_columns: Optional[List[str]] = None

    # Alterable
    chunk_interval: Optional[str] = None
    create_group_indexes: bool = False
    materialized_only: bool = False

    # Create-only
    with_no_data: bool = False

    model_config = {"frozen": True}


__all__ = ["AggregateFunction", "ContinuousAggregateDescriptor"]
