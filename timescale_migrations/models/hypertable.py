# ============================================================================
# HYPERTABLE DESCRIPTORS
# ============================================================================
# STATUS: Core - Hypertable and dimension value records
# PURPOSE: Immutable description of a partitioned table's TimescaleDB settings
# CREATED: 18 OCT 2026
# ============================================================================
"""
Hypertable descriptor models.

Dimension
    An additional partitioning axis. Range dimensions carry an interval,
    hash dimensions a partition count; never both.

HypertableDescriptor
    Everything create_hypertable and its follow-up calls need. Built once
    per snapshot by the extractor and never mutated.
"""

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from timescale_migrations.contracts import DimensionType
from timescale_migrations.exceptions import ConfigurationError
from timescale_migrations.models.common import dedupe


class Dimension(BaseModel):
    """
    Additional hypertable dimension.

    Accepts snake_case fields or the annotation JSON form
    ({"ColumnName": ..., "Type": 0|1|"Range"|"Hash", "Interval": ..., "NumberOfPartitions": ...}).
    """

    column_name: str = Field(
        ..., min_length=1,
        validation_alias=AliasChoices("column_name", "ColumnName"),
    )
    type: DimensionType = Field(
        DimensionType.RANGE,
        validation_alias=AliasChoices("type", "Type"),
    )
    interval: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("interval", "Interval"),
    )
    number_of_partitions: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("number_of_partitions", "NumberOfPartitions"),
    )

    model_config = {"frozen": True}

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(DimensionType)
            if 0 <= value < len(members):
                return members[value]
        if isinstance(value, str):
            for member in DimensionType:
                if member.value.lower() == value.strip().lower():
                    return member
        return value

    @model_validator(mode="after")
    def _check_shape(self) -> "Dimension":
        if self.type == DimensionType.RANGE:
            if not self.interval or not self.interval.strip():
                raise ConfigurationError(
                    "Interval must be provided for a range dimension.",
                    field="interval",
                )
            if self.number_of_partitions is not None:
                raise ConfigurationError(
                    "A range dimension cannot define number_of_partitions.",
                    field="number_of_partitions",
                    value=self.number_of_partitions,
                )
        else:
            if self.number_of_partitions is None or self.number_of_partitions <= 0:
                raise ConfigurationError(
                    "Number of partitions must be greater than zero.",
                    field="number_of_partitions",
                    value=self.number_of_partitions,
                )
            if self.interval is not None:
                raise ConfigurationError(
                    "A hash dimension cannot define an interval.",
                    field="interval",
                    value=self.interval,
                )
        return self

    @classmethod
    def by_range(cls, column_name: str, interval: str) -> "Dimension":
        """Create a range partitioning dimension (e.g. interval "1 day")."""
        return cls(column_name=column_name, type=DimensionType.RANGE, interval=interval)

    @classmethod
    def by_hash(cls, column_name: str, number_of_partitions: int) -> "Dimension":
        """Create a hash partitioning dimension."""
        return cls(
            column_name=column_name,
            type=DimensionType.HASH,
            number_of_partitions=number_of_partitions,
        )


def effective_compression(
    enable_compression: bool,
    chunk_skip_columns: Optional[List[str]] = None,
    compression_segment_by: Optional[List[str]] = None,
    compression_order_by: Optional[List[str]] = None,
) -> bool:
    """
    Whether compression is on once every implicit trigger is considered.

    Chunk skipping and segment-by/order-by settings all require compression.
    """
    return bool(
        enable_compression
        or chunk_skip_columns
        or compression_segment_by
        or compression_order_by
    )


class HypertableDescriptor(BaseModel):
    """
    Desired TimescaleDB state of one hypertable.

    chunk_time_interval is either a bare integer (raw time units for
    integer time columns) or an interval literal such as "7 days".
    """

    table_name: str = Field(..., min_length=1)
    schema_name: str = "public"
    time_column_name: str = Field(..., min_length=1)
    chunk_time_interval: str = "7 days"
    enable_compression: bool = False
    chunk_skip_columns: Optional[List[str]] = None
    additional_dimensions: Optional[List[Dimension]] = None
    migrate_data: bool = False
    compression_segment_by: Optional[List[str]] = None
    compression_order_by: Optional[List[str]] = None

    model_config = {"frozen": True}

    @field_validator("time_column_name")
    @classmethod
    def _time_column_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ConfigurationError(
                "time_column_name must not be empty.",
                field="time_column_name",
                value=value,
            )
        return value

    @field_validator("chunk_skip_columns")
    @classmethod
    def _dedupe_chunk_skip(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        # Empty collapses to None so "nothing to skip" has one representation
        if value is None:
            return None
        return dedupe(value) or None

    @property
    def effective_compression(self) -> bool:
        return effective_compression(
            self.enable_compression,
            self.chunk_skip_columns,
            self.compression_segment_by,
            self.compression_order_by,
        )


__all__ = ["Dimension", "HypertableDescriptor", "effective_compression"]
