# ============================================================================
# FEATURE DESCRIPTOR EXTRACTION
# ============================================================================
# STATUS: Core - Snapshot metadata -> typed descriptors
# PURPOSE: Read TimescaleDB:* annotations from a schema snapshot
# CREATED: 18 OCT 2026
# EXPORTS: extract_hypertables, extract_reorder_policies,
#          extract_continuous_aggregates, extract_refresh_policies
# ============================================================================
"""
Feature Descriptor Extraction.

Each extractor walks the snapshot objects in order and yields one
descriptor per object that carries the feature's marker annotation.
A None snapshot yields an empty list. Missing settings are filled from
TimescaleDefaults.

Objects with incomplete required annotations (no time column, no index,
unknown parent) are skipped. Invalid values in otherwise complete
annotations (an unparseable timestamp, a negative batch count) raise, so
misconfiguration surfaces when the migration is built.
"""

import json
from typing import Any, List, Optional

from timescale_migrations.config import TimescaleDefaults, get_defaults
from timescale_migrations.contracts import (
    ContinuousAggregateKeys,
    HypertableKeys,
    RefreshPolicyKeys,
    ReorderPolicyKeys,
)
from timescale_migrations.logging import get_logger, log_context
from timescale_migrations.models.common import split_list
from timescale_migrations.models.continuous_aggregate import (
    AggregateFunction,
    ContinuousAggregateDescriptor,
)
from timescale_migrations.models.hypertable import Dimension, HypertableDescriptor
from timescale_migrations.models.refresh_policy import RefreshPolicyDescriptor
from timescale_migrations.models.reorder_policy import ReorderPolicyDescriptor
from timescale_migrations.models.snapshot import SchemaSnapshot, SnapshotObject

logger = get_logger("features.extractors")


# ============================================================================
# VALUE COERCION
# ============================================================================

def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _as_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    return int(value)


def _json_list(value: Any) -> Optional[list]:
    """Lists pass through; strings are parsed as a JSON array."""
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        return json.loads(value)
    return list(value)


def _table_name(obj: SnapshotObject) -> str:
    return obj.table_name or obj.name


# ============================================================================
# HYPERTABLES
# ============================================================================

def extract_hypertables(
    snapshot: Optional[SchemaSnapshot],
    defaults: Optional[TimescaleDefaults] = None,
) -> List[HypertableDescriptor]:
    """
    Read hypertable descriptors.

    Chunk skipping needs compression, so a table with chunk-skip columns
    gets enable_compression=True even when the flag was not set.
    """
    if snapshot is None:
        return []
    defaults = defaults or get_defaults()

    descriptors = []
    for obj in snapshot.objects:
        if not _as_bool(obj.get(HypertableKeys.IS_HYPERTABLE)):
            continue

        time_column = _as_str(obj.get(HypertableKeys.TIME_COLUMN))
        if time_column is None:
            with log_context(table=_table_name(obj)):
                logger.warning("Hypertable without time column skipped")
            continue

        chunk_skip_columns = split_list(obj.get(HypertableKeys.CHUNK_SKIP_COLUMNS))

        dimensions = None
        raw_dimensions = _json_list(obj.get(HypertableKeys.ADDITIONAL_DIMENSIONS))
        if raw_dimensions is not None:
            dimensions = [
                item if isinstance(item, Dimension) else Dimension.model_validate(item)
                for item in raw_dimensions
            ]

        enable_compression = _as_bool(obj.get(HypertableKeys.ENABLE_COMPRESSION))

        descriptors.append(HypertableDescriptor(
            table_name=_table_name(obj),
            schema_name=obj.schema_name or defaults.default_schema,
            time_column_name=time_column,
            chunk_time_interval=_as_str(obj.get(HypertableKeys.CHUNK_TIME_INTERVAL))
            or defaults.chunk_time_interval,
            enable_compression=enable_compression or bool(chunk_skip_columns),
            chunk_skip_columns=chunk_skip_columns,
            additional_dimensions=dimensions,
            migrate_data=_as_bool(obj.get(HypertableKeys.MIGRATE_DATA)),
            compression_segment_by=split_list(obj.get(HypertableKeys.COMPRESSION_SEGMENT_BY)),
            compression_order_by=split_list(obj.get(HypertableKeys.COMPRESSION_ORDER_BY)),
        ))

    return descriptors


# ============================================================================
# REORDER POLICIES
# ============================================================================

def extract_reorder_policies(
    snapshot: Optional[SchemaSnapshot],
    defaults: Optional[TimescaleDefaults] = None,
) -> List[ReorderPolicyDescriptor]:
    """Read reorder policy descriptors, filling job settings from defaults."""
    if snapshot is None:
        return []
    defaults = defaults or get_defaults()

    descriptors = []
    for obj in snapshot.objects:
        if not _as_bool(obj.get(ReorderPolicyKeys.HAS_REORDER_POLICY)):
            continue

        index_name = _as_str(obj.get(ReorderPolicyKeys.INDEX_NAME))
        if index_name is None:
            with log_context(table=_table_name(obj)):
                logger.warning("Reorder policy without index skipped")
            continue

        descriptors.append(ReorderPolicyDescriptor(
            table_name=_table_name(obj),
            schema_name=obj.schema_name or defaults.default_schema,
            index_name=index_name,
            initial_start=obj.get(ReorderPolicyKeys.INITIAL_START),
            schedule_interval=_as_str(obj.get(ReorderPolicyKeys.SCHEDULE_INTERVAL))
            or defaults.reorder_schedule_interval,
            max_runtime=_as_str(obj.get(ReorderPolicyKeys.MAX_RUNTIME))
            or defaults.reorder_max_runtime,
            max_retries=_as_int(obj.get(ReorderPolicyKeys.MAX_RETRIES), defaults.reorder_max_retries),
            retry_period=_as_str(obj.get(ReorderPolicyKeys.RETRY_PERIOD))
            or defaults.reorder_retry_period,
        ))

    return descriptors


# ============================================================================
# CONTINUOUS AGGREGATES
# ============================================================================

def _parse_aggregates(obj: SnapshotObject) -> Optional[List[AggregateFunction]]:
    value = obj.get(ContinuousAggregateKeys.AGGREGATE_FUNCTIONS)
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        value = json.loads(text) if text.startswith("[") else split_list(text)

    aggregates = []
    for item in value:
        if isinstance(item, AggregateFunction):
            aggregates.append(item)
        elif isinstance(item, dict):
            aggregates.append(AggregateFunction.model_validate(item))
        else:
            parsed = AggregateFunction.parse(str(item))
            if parsed is None:
                with log_context(table=obj.name):
                    logger.warning("Malformed aggregate function skipped", extra={"value": str(item)})
                continue
            aggregates.append(parsed)
    return aggregates


def _parse_group_by(obj: SnapshotObject) -> Optional[List[str]]:
    # Entries may be raw SQL containing commas, so strings are JSON only
    value = obj.get(ContinuousAggregateKeys.GROUP_BY_COLUMNS)
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        return [str(v) for v in json.loads(text)] if text.startswith("[") else [text]
    return [str(v) for v in value]


def _resolve_view(
    obj: SnapshotObject,
    snapshot: SchemaSnapshot,
    defaults: TimescaleDefaults,
):
    """Return (view_name, parent_object, schema) or None when unresolvable."""
    view_name = _as_str(obj.get(ContinuousAggregateKeys.MATERIALIZED_VIEW_NAME))
    if view_name is None:
        return None

    parent_name = _as_str(obj.get(ContinuousAggregateKeys.PARENT_NAME))
    parent = snapshot.find(parent_name) if parent_name else None
    if parent is None:
        with log_context(table=view_name):
            logger.warning("Continuous aggregate with unknown parent skipped", extra={"parent": parent_name})
        return None

    schema = parent.schema_name or obj.schema_name or defaults.default_schema
    return view_name, parent, schema


def extract_continuous_aggregates(
    snapshot: Optional[SchemaSnapshot],
    defaults: Optional[TimescaleDefaults] = None,
) -> List[ContinuousAggregateDescriptor]:
    """
    Read continuous aggregate descriptors.

    The parent is referenced by snapshot object name; its table name
    becomes parent_name and its schema becomes the view schema.
    """
    if snapshot is None:
        return []
    defaults = defaults or get_defaults()

    descriptors = []
    for obj in snapshot.objects:
        resolved = _resolve_view(obj, snapshot, defaults)
        if resolved is None:
            continue
        view_name, parent, schema = resolved

        width = _as_str(obj.get(ContinuousAggregateKeys.TIME_BUCKET_WIDTH))
        source_column = _as_str(obj.get(ContinuousAggregateKeys.TIME_BUCKET_SOURCE_COLUMN))
        if width is None or source_column is None:
            with log_context(table=view_name):
                logger.warning("Continuous aggregate without time bucket skipped")
            continue

        descriptors.append(ContinuousAggregateDescriptor(
            materialized_view_name=view_name,
            schema_name=schema,
            parent_name=_table_name(parent),
            time_bucket_width=width,
            time_bucket_source_column=source_column,
            time_bucket_group_by=_as_bool(
                obj.get(ContinuousAggregateKeys.TIME_BUCKET_GROUP_BY),
                defaults.time_bucket_group_by,
            ),
            where_clause=_as_str(obj.get(ContinuousAggregateKeys.WHERE_CLAUSE)),
            aggregate_functions=_parse_aggregates(obj),
            group_by_columns=_parse_group_by(obj),
            chunk_interval=_as_str(obj.get(ContinuousAggregateKeys.CHUNK_INTERVAL)),
            create_group_indexes=_as_bool(obj.get(ContinuousAggregateKeys.CREATE_GROUP_INDEXES)),
            materialized_only=_as_bool(obj.get(ContinuousAggregateKeys.MATERIALIZED_ONLY)),
            with_no_data=_as_bool(obj.get(ContinuousAggregateKeys.WITH_NO_DATA)),
        ))

    return descriptors


# ============================================================================
# REFRESH POLICIES
# ============================================================================

def extract_refresh_policies(
    snapshot: Optional[SchemaSnapshot],
    defaults: Optional[TimescaleDefaults] = None,
) -> List[RefreshPolicyDescriptor]:
    """Read refresh policy descriptors from continuous aggregate objects."""
    if snapshot is None:
        return []
    defaults = defaults or get_defaults()

    descriptors = []
    for obj in snapshot.objects:
        if not _as_bool(obj.get(RefreshPolicyKeys.HAS_REFRESH_POLICY)):
            continue
        resolved = _resolve_view(obj, snapshot, defaults)
        if resolved is None:
            continue
        view_name, _, schema = resolved

        include_tiered = obj.get(RefreshPolicyKeys.INCLUDE_TIERED_DATA)

        descriptors.append(RefreshPolicyDescriptor(
            materialized_view_name=view_name,
            schema_name=schema,
            start_offset=_as_str(obj.get(RefreshPolicyKeys.START_OFFSET)),
            end_offset=_as_str(obj.get(RefreshPolicyKeys.END_OFFSET)),
            schedule_interval=_as_str(obj.get(RefreshPolicyKeys.SCHEDULE_INTERVAL)),
            initial_start=obj.get(RefreshPolicyKeys.INITIAL_START),
            if_not_exists=_as_bool(obj.get(RefreshPolicyKeys.IF_NOT_EXISTS)),
            timezone=_as_str(obj.get(RefreshPolicyKeys.TIMEZONE)),
            include_tiered_data=None if include_tiered is None else _as_bool(include_tiered),
            buckets_per_batch=_as_int(
                obj.get(RefreshPolicyKeys.BUCKETS_PER_BATCH), defaults.refresh_buckets_per_batch
            ),
            max_batches_per_execution=_as_int(
                obj.get(RefreshPolicyKeys.MAX_BATCHES_PER_EXECUTION),
                defaults.refresh_max_batches_per_execution,
            ),
            refresh_newest_first=_as_bool(
                obj.get(RefreshPolicyKeys.REFRESH_NEWEST_FIRST), defaults.refresh_newest_first
            ),
        ))

    return descriptors


__all__ = [
    "extract_hypertables",
    "extract_reorder_policies",
    "extract_continuous_aggregates",
    "extract_refresh_policies",
]
