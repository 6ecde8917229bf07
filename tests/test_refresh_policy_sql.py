# ============================================================================
# REFRESH POLICY SQL GENERATOR TESTS
# ============================================================================
# STATUS: Tests - Refresh policy add/remove statement generation
# PURPOSE: Verify offsets and optional argument emission
# CREATED: 18 OCT 2026
# ============================================================================
"""
Refresh Policy SQL Generator Tests

Run with:
    pytest tests/test_refresh_policy_sql.py -v
"""

import pytest

from timescale_migrations.config import TimescaleDefaults
from timescale_migrations.operations import (
    AddContinuousAggregatePolicyOperation,
    RemoveContinuousAggregatePolicyOperation,
)
from timescale_migrations.schema import RefreshPolicySqlGenerator


def _make_add(**overrides):
    fields = dict(materialized_view_name="hourly_metrics")
    fields.update(overrides)
    return AddContinuousAggregatePolicyOperation(**fields)


@pytest.fixture
def generator():
    return RefreshPolicySqlGenerator(defaults=TimescaleDefaults())


class TestAddRefreshPolicy:
    def test_null_offsets(self, generator):
        assert generator.generate(_make_add()) == [
            "SELECT add_continuous_aggregate_policy('public.\"hourly_metrics\"', "
            "start_offset => NULL, end_offset => NULL);"
        ]

    def test_interval_offsets_and_schedule(self, generator):
        statements = generator.generate(_make_add(
            start_offset="1 month", end_offset="1 hour", schedule_interval="1 hour",
        ))
        assert statements == [
            "SELECT add_continuous_aggregate_policy('public.\"hourly_metrics\"', "
            "start_offset => INTERVAL '1 month', end_offset => INTERVAL '1 hour', "
            "schedule_interval => INTERVAL '1 hour');"
        ]

    def test_integer_offsets(self, generator):
        sql = generator.generate(_make_add(start_offset="100", end_offset="10"))[0]
        assert "start_offset => 100, end_offset => 10" in sql

    def test_optional_arguments(self, generator):
        sql = generator.generate(_make_add(
            if_not_exists=True,
            timezone="Europe/Vienna",
            include_tiered_data=False,
            buckets_per_batch=5,
            max_batches_per_execution=10,
            refresh_newest_first=False,
            initial_start="2025-12-15T03:00:00Z",
        ))[0]
        assert sql.endswith(
            "if_not_exists => true, timezone => 'Europe/Vienna', include_tiered_data => false, "
            "buckets_per_batch => 5, max_batches_per_execution => 10, "
            "refresh_newest_first => false, initial_start => '2025-12-15T03:00:00.000000Z');"
        )

    def test_default_batch_settings_omitted(self, generator):
        sql = generator.generate(_make_add(
            buckets_per_batch=1, max_batches_per_execution=0, refresh_newest_first=True,
        ))[0]
        assert "buckets_per_batch" not in sql
        assert "max_batches_per_execution" not in sql
        assert "refresh_newest_first" not in sql


class TestRemoveRefreshPolicy:
    def test_remove(self, generator):
        op = RemoveContinuousAggregatePolicyOperation(materialized_view_name="hourly_metrics")
        assert generator.generate(op) == [
            "SELECT remove_continuous_aggregate_policy('public.\"hourly_metrics\"');"
        ]

    def test_remove_if_exists(self, generator):
        op = RemoveContinuousAggregatePolicyOperation(
            materialized_view_name="hourly_metrics", if_exists=True,
        )
        assert generator.generate(op) == [
            "SELECT remove_continuous_aggregate_policy('public.\"hourly_metrics\"', if_exists => true);"
        ]
