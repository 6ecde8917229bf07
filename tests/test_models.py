# ============================================================================
# DESCRIPTOR MODEL TESTS
# ============================================================================
# STATUS: Tests - Descriptor, snapshot and operation model unit tests
# PURPOSE: Verify validation, normalization and enum behavior
# CREATED: 18 OCT 2026
# ============================================================================
"""
Descriptor Model Tests

Unit tests for the model layer:
- Enums: DimensionType, AggregateFunctionType
- Dimension shape validation
- HypertableDescriptor normalization and effective compression
- Initial-start parsing on reorder and refresh policies
- Refresh policy batch validation
- AggregateFunction flat-string parsing
- Snapshot lookup

Run with:
    pytest tests/test_models.py -v
"""

import pytest
from datetime import datetime, timezone

from pydantic import ValidationError

from timescale_migrations.contracts import AggregateFunctionType, DimensionType
from timescale_migrations.exceptions import (
    ConfigurationError,
    UnsupportedAggregateFunctionError,
)
from timescale_migrations.models import (
    AggregateFunction,
    Dimension,
    HypertableDescriptor,
    RefreshPolicyDescriptor,
    ReorderPolicyDescriptor,
    SchemaSnapshot,
    SnapshotObject,
)
from timescale_migrations.models.common import (
    format_timestamp,
    is_integer_literal,
    parse_initial_start,
)
from timescale_migrations.operations import (
    AlterReorderPolicyOperation,
    CreateHypertableOperation,
)


# ============================================================================
# ENUM TESTS
# ============================================================================


class TestDimensionType:
    def test_values(self):
        assert DimensionType.RANGE.value == "Range"
        assert DimensionType.HASH.value == "Hash"


class TestAggregateFunctionType:
    def test_values(self):
        assert AggregateFunctionType.AVG.value == "Avg"
        assert AggregateFunctionType.LAST.value == "Last"

    def test_is_time_ordered(self):
        assert AggregateFunctionType.FIRST.is_time_ordered()
        assert AggregateFunctionType.LAST.is_time_ordered()
        assert not AggregateFunctionType.AVG.is_time_ordered()
        assert not AggregateFunctionType.COUNT.is_time_ordered()


# ============================================================================
# DIMENSION TESTS
# ============================================================================


class TestDimension:
    def test_by_range(self):
        dim = Dimension.by_range("DeviceId", "1 day")
        assert dim.type == DimensionType.RANGE
        assert dim.interval == "1 day"
        assert dim.number_of_partitions is None

    def test_by_hash(self):
        dim = Dimension.by_hash("DeviceId", 4)
        assert dim.type == DimensionType.HASH
        assert dim.number_of_partitions == 4
        assert dim.interval is None

    def test_range_requires_interval(self):
        with pytest.raises(ValueError, match="Interval must be provided"):
            Dimension(column_name="DeviceId", type=DimensionType.RANGE)

    def test_hash_requires_positive_partitions(self):
        with pytest.raises(ValueError, match="greater than zero"):
            Dimension.by_hash("DeviceId", 0)

    def test_hash_rejects_interval(self):
        with pytest.raises(ValueError):
            Dimension(column_name="DeviceId", type=DimensionType.HASH,
                      number_of_partitions=2, interval="1 day")

    def test_annotation_json_form(self):
        """Annotation JSON uses PascalCase keys and an integer enum."""
        dim = Dimension.model_validate(
            {"ColumnName": "DeviceId", "Type": 1, "NumberOfPartitions": 8}
        )
        assert dim.column_name == "DeviceId"
        assert dim.type == DimensionType.HASH
        assert dim.number_of_partitions == 8

    def test_type_name_is_case_insensitive(self):
        dim = Dimension.model_validate({"column_name": "Seq", "type": "range", "interval": "1000"})
        assert dim.type == DimensionType.RANGE

    def test_frozen(self):
        dim = Dimension.by_range("DeviceId", "1 day")
        with pytest.raises(ValidationError):
            dim.interval = "2 days"


# ============================================================================
# HYPERTABLE DESCRIPTOR TESTS
# ============================================================================


class TestHypertableDescriptor:
    def test_defaults(self):
        h = HypertableDescriptor(table_name="Metrics", time_column_name="Timestamp")
        assert h.schema_name == "public"
        assert h.chunk_time_interval == "7 days"
        assert h.enable_compression is False
        assert h.chunk_skip_columns is None

    def test_time_column_required(self):
        with pytest.raises(ValueError):
            HypertableDescriptor(table_name="Metrics", time_column_name="")

    def test_chunk_skip_columns_deduplicated_in_order(self):
        h = HypertableDescriptor(
            table_name="Metrics", time_column_name="Timestamp",
            chunk_skip_columns=["Value", "DeviceId", "Value"],
        )
        assert h.chunk_skip_columns == ["Value", "DeviceId"]

    def test_empty_chunk_skip_columns_collapse_to_none(self):
        h = HypertableDescriptor(
            table_name="Metrics", time_column_name="Timestamp", chunk_skip_columns=[],
        )
        assert h.chunk_skip_columns is None

    def test_effective_compression(self):
        base = dict(table_name="Metrics", time_column_name="Timestamp")
        assert not HypertableDescriptor(**base).effective_compression
        assert HypertableDescriptor(**base, enable_compression=True).effective_compression
        assert HypertableDescriptor(**base, chunk_skip_columns=["Value"]).effective_compression
        assert HypertableDescriptor(**base, compression_segment_by=["DeviceId"]).effective_compression
        assert HypertableDescriptor(**base, compression_order_by=["Timestamp DESC"]).effective_compression

    def test_create_operation_carries_descriptor_fields(self):
        h = HypertableDescriptor(
            table_name="Metrics", time_column_name="Timestamp",
            additional_dimensions=[Dimension.by_hash("DeviceId", 4)],
        )
        op = CreateHypertableOperation.from_descriptor(h)
        assert isinstance(op, HypertableDescriptor)
        assert op.table_name == "Metrics"
        assert op.additional_dimensions == [Dimension.by_hash("DeviceId", 4)]


# ============================================================================
# INITIAL START TESTS
# ============================================================================


class TestInitialStart:
    def test_parse_utc_suffix(self):
        value = parse_initial_start("2025-10-20T12:30:00Z")
        assert value == datetime(2025, 10, 20, 12, 30, tzinfo=timezone.utc)

    def test_parse_none_and_datetime(self):
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert parse_initial_start(None) is None
        assert parse_initial_start(now) is now

    def test_parse_invalid_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_initial_start("invalid-date-format")
        assert exc_info.value.field == "initial_start"

    def test_reorder_policy_invalid_initial_start(self):
        with pytest.raises(ValueError, match="not a valid DateTime format") as exc_info:
            ReorderPolicyDescriptor(
                table_name="Metrics", index_name="ix_time",
                initial_start="invalid-date-format",
            )
        assert "initial_start" in str(exc_info.value)

    def test_refresh_policy_invalid_initial_start(self):
        with pytest.raises(ValueError, match="not a valid DateTime format"):
            RefreshPolicyDescriptor(
                materialized_view_name="hourly", initial_start="invalid-date-format",
            )

    def test_alter_operation_parses_both_sides(self):
        op = AlterReorderPolicyOperation(
            table_name="Metrics", index_name="ix_time",
            initial_start="2025-10-20T12:30:00Z",
            old_initial_start="2025-10-19T12:30:00Z",
        )
        assert op.initial_start.day == 20
        assert op.old_initial_start.day == 19
        assert op.requires_recreation

    def test_format_timestamp_naive_is_utc(self):
        assert format_timestamp(datetime(2025, 10, 20, 12, 30)) == "2025-10-20T12:30:00.000000Z"


# ============================================================================
# REFRESH POLICY TESTS
# ============================================================================


class TestRefreshPolicyDescriptor:
    def test_defaults(self):
        p = RefreshPolicyDescriptor(materialized_view_name="hourly")
        assert p.buckets_per_batch == 1
        assert p.max_batches_per_execution == 0
        assert p.refresh_newest_first is True

    def test_buckets_per_batch_below_one(self):
        with pytest.raises(ValueError, match="buckets_per_batch"):
            RefreshPolicyDescriptor(materialized_view_name="hourly", buckets_per_batch=0)

    def test_negative_max_batches(self):
        with pytest.raises(ValueError, match="max_batches_per_execution"):
            RefreshPolicyDescriptor(materialized_view_name="hourly", max_batches_per_execution=-1)

    def test_integer_offsets_become_strings(self):
        p = RefreshPolicyDescriptor(materialized_view_name="hourly", start_offset=100, end_offset=10)
        assert p.start_offset == "100"
        assert p.end_offset == "10"


# ============================================================================
# AGGREGATE FUNCTION TESTS
# ============================================================================


class TestAggregateFunction:
    def test_parse_flat_form(self):
        agg = AggregateFunction.parse("AvgValue:Avg:Value")
        assert agg == AggregateFunction(alias="AvgValue", function="Avg", source_column="Value")
        assert agg.to_flat() == "AvgValue:Avg:Value"

    @pytest.mark.parametrize("text", ["AvgValue:Avg", "a:b:c:d", "::", "AvgValue"])
    def test_parse_malformed_returns_none(self, text):
        assert AggregateFunction.parse(text) is None

    def test_enum_function_accepted(self):
        agg = AggregateFunction(alias="x", function=AggregateFunctionType.SUM, source_column="Value")
        assert agg.function == "Sum"
        assert agg.function_type == AggregateFunctionType.SUM

    def test_unknown_function_fails_on_resolution(self):
        agg = AggregateFunction(alias="x", function="Median", source_column="Value")
        with pytest.raises(UnsupportedAggregateFunctionError, match="Median"):
            agg.function_type

    @pytest.mark.parametrize("name", ["avg", "AVG", "last"])
    def test_function_name_is_case_sensitive(self, name):
        agg = AggregateFunction(alias="x", function=name, source_column="Value")
        with pytest.raises(UnsupportedAggregateFunctionError, match=name):
            agg.function_type


# ============================================================================
# SNAPSHOT TESTS
# ============================================================================


class TestSchemaSnapshot:
    def test_find_by_name_then_table_name(self):
        snapshot = SchemaSnapshot(objects=[
            SnapshotObject(name="Metric", table_name="Metrics"),
            SnapshotObject(name="Device", table_name="devices"),
        ])
        assert snapshot.find("Metric").table_name == "Metrics"
        assert snapshot.find("devices").name == "Device"
        assert snapshot.find("missing") is None

    def test_get_returns_default_for_none(self):
        obj = SnapshotObject(name="Metric", metadata={"a": None, "b": 1})
        assert obj.get("a", "fallback") == "fallback"
        assert obj.get("b") == 1
        assert not obj.has("a")
        assert obj.has("b")


class TestIsIntegerLiteral:
    def test_cases(self):
        assert is_integer_literal("86400000000")
        assert is_integer_literal(" 42 ")
        assert not is_integer_literal("7 days")
        assert not is_integer_literal(None)
