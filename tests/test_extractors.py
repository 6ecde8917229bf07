# ============================================================================
# EXTRACTOR TESTS
# ============================================================================
# STATUS: Tests - Snapshot annotation -> descriptor extraction
# PURPOSE: Verify defaults, coercion and skip rules for every feature
# CREATED: 18 OCT 2026
# ============================================================================
"""
Extractor Tests

Run with:
    pytest tests/test_extractors.py -v
"""

from datetime import datetime, timezone

import pytest

from timescale_migrations.config import TimescaleDefaults
from timescale_migrations.contracts import (
    ContinuousAggregateKeys as CK,
    DimensionType,
    HypertableKeys as HK,
    RefreshPolicyKeys as RK,
    ReorderPolicyKeys as PK,
)
from timescale_migrations.features import (
    extract_continuous_aggregates,
    extract_hypertables,
    extract_refresh_policies,
    extract_reorder_policies,
)
from timescale_migrations.models import AggregateFunction, SchemaSnapshot, SnapshotObject

DEFAULTS = TimescaleDefaults()


def _snapshot(*objects):
    return SchemaSnapshot(objects=list(objects))


def _metrics(**metadata):
    base = {HK.IS_HYPERTABLE: True, HK.TIME_COLUMN: "Timestamp"}
    base.update(metadata)
    return SnapshotObject(name="Metric", table_name="Metrics", metadata=base)


def _view(name="HourlyMetric", **metadata):
    base = {
        CK.MATERIALIZED_VIEW_NAME: "hourly_metrics",
        CK.PARENT_NAME: "Metric",
        CK.TIME_BUCKET_WIDTH: "1 hour",
        CK.TIME_BUCKET_SOURCE_COLUMN: "Timestamp",
    }
    base.update(metadata)
    return SnapshotObject(name=name, metadata=base)


@pytest.mark.parametrize("extract", [
    extract_hypertables,
    extract_reorder_policies,
    extract_continuous_aggregates,
    extract_refresh_policies,
])
def test_none_snapshot_yields_empty(extract):
    assert extract(None, DEFAULTS) == []


# ============================================================================
# HYPERTABLES
# ============================================================================


class TestExtractHypertables:
    def test_defaults(self):
        (ht,) = extract_hypertables(_snapshot(_metrics()), DEFAULTS)
        assert ht.table_name == "Metrics"
        assert ht.schema_name == "public"
        assert ht.time_column_name == "Timestamp"
        assert ht.chunk_time_interval == "7 days"
        assert ht.enable_compression is False
        assert ht.additional_dimensions is None

    def test_ignores_unmarked_objects(self):
        plain = SnapshotObject(name="Device", table_name="Devices")
        assert extract_hypertables(_snapshot(plain), DEFAULTS) == []

    def test_missing_time_column_skipped(self):
        obj = SnapshotObject(name="Metric", metadata={HK.IS_HYPERTABLE: True})
        assert extract_hypertables(_snapshot(obj), DEFAULTS) == []

    def test_chunk_skip_columns_enable_compression(self):
        (ht,) = extract_hypertables(
            _snapshot(_metrics(**{HK.CHUNK_SKIP_COLUMNS: ["Value", "DeviceId"]})), DEFAULTS
        )
        assert ht.enable_compression is True
        assert ht.chunk_skip_columns == ["Value", "DeviceId"]

    def test_string_annotations(self):
        (ht,) = extract_hypertables(_snapshot(_metrics(**{
            HK.IS_HYPERTABLE: "true",
            HK.CHUNK_TIME_INTERVAL: "1 day",
            HK.MIGRATE_DATA: "True",
            HK.COMPRESSION_SEGMENT_BY: "DeviceId, Region",
        })), DEFAULTS)
        assert ht.chunk_time_interval == "1 day"
        assert ht.migrate_data is True
        assert ht.compression_segment_by == ["DeviceId", "Region"]

    def test_dimensions_from_json(self):
        dims = (
            '[{"ColumnName": "DeviceId", "Type": "Hash", "NumberOfPartitions": 4},'
            ' {"ColumnName": "CreatedAt", "Type": 0, "Interval": "1 day"}]'
        )
        (ht,) = extract_hypertables(_snapshot(_metrics(**{HK.ADDITIONAL_DIMENSIONS: dims})), DEFAULTS)
        assert [d.type for d in ht.additional_dimensions] == [DimensionType.HASH, DimensionType.RANGE]
        assert ht.additional_dimensions[0].number_of_partitions == 4
        assert ht.additional_dimensions[1].interval == "1 day"

    def test_schema_from_object(self):
        obj = SnapshotObject(
            name="Metric", table_name="Metrics", schema_name="telemetry",
            metadata={HK.IS_HYPERTABLE: True, HK.TIME_COLUMN: "Timestamp"},
        )
        (ht,) = extract_hypertables(_snapshot(obj), DEFAULTS)
        assert ht.schema_name == "telemetry"

    def test_configured_chunk_interval_default(self):
        defaults = TimescaleDefaults(chunk_time_interval="1 day")
        (ht,) = extract_hypertables(_snapshot(_metrics()), defaults)
        assert ht.chunk_time_interval == "1 day"


# ============================================================================
# REORDER POLICIES
# ============================================================================


class TestExtractReorderPolicies:
    def _obj(self, **metadata):
        base = {PK.HAS_REORDER_POLICY: True, PK.INDEX_NAME: "ix_metrics_time"}
        base.update(metadata)
        return SnapshotObject(name="Metric", table_name="Metrics", metadata=base)

    def test_fills_job_defaults(self):
        (policy,) = extract_reorder_policies(_snapshot(self._obj()), DEFAULTS)
        assert policy.table_name == "Metrics"
        assert policy.index_name == "ix_metrics_time"
        assert policy.schedule_interval == "1 day"
        assert policy.max_runtime == "00:00:00"
        assert policy.max_retries == -1
        assert policy.retry_period == "00:05:00"
        assert policy.initial_start is None

    def test_explicit_values(self):
        (policy,) = extract_reorder_policies(_snapshot(self._obj(**{
            PK.SCHEDULE_INTERVAL: "2 days",
            PK.MAX_RETRIES: "5",
            PK.INITIAL_START: "2025-10-20T12:30:00Z",
        })), DEFAULTS)
        assert policy.schedule_interval == "2 days"
        assert policy.max_retries == 5
        assert policy.initial_start == datetime(2025, 10, 20, 12, 30, tzinfo=timezone.utc)

    def test_missing_index_skipped(self):
        obj = SnapshotObject(name="Metric", metadata={PK.HAS_REORDER_POLICY: True})
        assert extract_reorder_policies(_snapshot(obj), DEFAULTS) == []

    def test_invalid_initial_start_raises(self):
        with pytest.raises(ValueError, match="not a valid DateTime format"):
            extract_reorder_policies(_snapshot(self._obj(**{PK.INITIAL_START: "yesterday"})), DEFAULTS)


# ============================================================================
# CONTINUOUS AGGREGATES
# ============================================================================


class TestExtractContinuousAggregates:
    def test_resolves_parent_table_and_schema(self):
        parent = SnapshotObject(name="Metric", table_name="Metrics", schema_name="telemetry")
        (view,) = extract_continuous_aggregates(_snapshot(parent, _view()), DEFAULTS)
        assert view.materialized_view_name == "hourly_metrics"
        assert view.parent_name == "Metrics"
        assert view.schema_name == "telemetry"
        assert view.time_bucket_group_by is True

    def test_unknown_parent_skipped(self):
        assert extract_continuous_aggregates(_snapshot(_view()), DEFAULTS) == []

    def test_missing_bucket_skipped(self):
        parent = SnapshotObject(name="Metric", table_name="Metrics")
        view = _view(**{CK.TIME_BUCKET_WIDTH: None})
        assert extract_continuous_aggregates(_snapshot(parent, view), DEFAULTS) == []

    def test_aggregates_from_flat_strings(self):
        parent = SnapshotObject(name="Metric", table_name="Metrics")
        view = _view(**{CK.AGGREGATE_FUNCTIONS: ["AvgValue:Avg:Value", "MaxValue:Max:Value"]})
        (descriptor,) = extract_continuous_aggregates(_snapshot(parent, view), DEFAULTS)
        assert descriptor.aggregate_functions == [
            AggregateFunction(alias="AvgValue", function="Avg", source_column="Value"),
            AggregateFunction(alias="MaxValue", function="Max", source_column="Value"),
        ]

    def test_malformed_aggregate_skipped(self):
        parent = SnapshotObject(name="Metric", table_name="Metrics")
        view = _view(**{CK.AGGREGATE_FUNCTIONS: "AvgValue:Avg:Value,broken"})
        (descriptor,) = extract_continuous_aggregates(_snapshot(parent, view), DEFAULTS)
        assert [a.alias for a in descriptor.aggregate_functions] == ["AvgValue"]

    def test_group_by_json_keeps_raw_expressions(self):
        parent = SnapshotObject(name="Metric", table_name="Metrics")
        view = _view(**{CK.GROUP_BY_COLUMNS: '["DeviceId", "1, 2"]'})
        (descriptor,) = extract_continuous_aggregates(_snapshot(parent, view), DEFAULTS)
        assert descriptor.group_by_columns == ["DeviceId", "1, 2"]

    def test_options(self):
        parent = SnapshotObject(name="Metric", table_name="Metrics")
        view = _view(**{
            CK.CHUNK_INTERVAL: "7 days",
            CK.MATERIALIZED_ONLY: "true",
            CK.WITH_NO_DATA: True,
            CK.TIME_BUCKET_GROUP_BY: False,
        })
        (descriptor,) = extract_continuous_aggregates(_snapshot(parent, view), DEFAULTS)
        assert descriptor.chunk_interval == "7 days"
        assert descriptor.materialized_only is True
        assert descriptor.with_no_data is True
        assert descriptor.time_bucket_group_by is False


# ============================================================================
# REFRESH POLICIES
# ============================================================================


class TestExtractRefreshPolicies:
    def test_reads_policy(self):
        parent = SnapshotObject(name="Metric", table_name="Metrics")
        view = _view(**{
            RK.HAS_REFRESH_POLICY: True,
            RK.START_OFFSET: "1 month",
            RK.END_OFFSET: "1 hour",
            RK.BUCKETS_PER_BATCH: "5",
            RK.INCLUDE_TIERED_DATA: "false",
        })
        (policy,) = extract_refresh_policies(_snapshot(parent, view), DEFAULTS)
        assert policy.materialized_view_name == "hourly_metrics"
        assert policy.start_offset == "1 month"
        assert policy.end_offset == "1 hour"
        assert policy.buckets_per_batch == 5
        assert policy.include_tiered_data is False
        assert policy.refresh_newest_first is True

    def test_views_without_policy_ignored(self):
        parent = SnapshotObject(name="Metric", table_name="Metrics")
        assert extract_refresh_policies(_snapshot(parent, _view()), DEFAULTS) == []

    def test_invalid_batch_size_raises(self):
        parent = SnapshotObject(name="Metric", table_name="Metrics")
        view = _view(**{RK.HAS_REFRESH_POLICY: True, RK.BUCKETS_PER_BATCH: 0})
        with pytest.raises(ValueError, match="buckets_per_batch"):
            extract_refresh_policies(_snapshot(parent, view), DEFAULTS)
