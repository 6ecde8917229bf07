# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums and metadata-key contracts
# PURPOSE: Define the enums and annotation keys shared by every feature
# CREATED: 18 OCT 2026
# EXPORTS: DimensionType, AggregateFunctionType, QuoteMode, HypertableKeys,
#          ReorderPolicyKeys, ContinuousAggregateKeys, RefreshPolicyKeys
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the TimescaleDB feature engine.

These define the vocabulary that crosses boundaries:
- Snapshot metadata (annotation keys written by the configuration layer)
- Descriptors and operations (Python models)
- Generated SQL (quoting mode, function names)
"""

from enum import Enum


# ============================================================================
# ENUMS
# ============================================================================

class DimensionType(str, Enum):
    """
    Partitioning axis kinds for hypertable dimensions.

    RANGE dimensions carry an interval, HASH dimensions a partition count.
    """
    RANGE = "Range"
    HASH = "Hash"


class AggregateFunctionType(str, Enum):
    """
    Aggregate functions supported in continuous aggregate SELECT lists.

    Values are the names stored in snapshot metadata.
    """
    AVG = "Avg"
    MAX = "Max"
    MIN = "Min"
    SUM = "Sum"
    COUNT = "Count"
    FIRST = "First"
    LAST = "Last"

    def is_time_ordered(self) -> bool:
        """first()/last() take the time column as a second argument."""
        return self in (AggregateFunctionType.FIRST, AggregateFunctionType.LAST)


class QuoteMode(str, Enum):
    """
    Identifier escaping style for generated statements.

    RUNTIME: statements are executed directly.
    SCRIPT: statements are embedded in a verbatim string literal of a
            generated migration source file, so every double quote is doubled.
    """
    RUNTIME = "runtime"
    SCRIPT = "script"


# ============================================================================
# SNAPSHOT METADATA KEYS
# ============================================================================

class HypertableKeys:
    """Metadata keys describing a hypertable."""
    IS_HYPERTABLE = "TimescaleDB:IsHypertable"
    TIME_COLUMN = "TimescaleDB:TimeColumnName"
    CHUNK_TIME_INTERVAL = "TimescaleDB:ChunkTimeInterval"
    ENABLE_COMPRESSION = "TimescaleDB:EnableCompression"
    CHUNK_SKIP_COLUMNS = "TimescaleDB:ChunkSkipColumns"
    ADDITIONAL_DIMENSIONS = "TimescaleDB:AdditionalDimensions"
    MIGRATE_DATA = "TimescaleDB:MigrateData"
    COMPRESSION_SEGMENT_BY = "TimescaleDB:CompressionSegmentBy"
    COMPRESSION_ORDER_BY = "TimescaleDB:CompressionOrderBy"


class ReorderPolicyKeys:
    """Metadata keys describing a reorder policy."""
    HAS_REORDER_POLICY = "TimescaleDB:HasReorderPolicy"
    INDEX_NAME = "TimescaleDB:ReorderPolicy:IndexName"
    INITIAL_START = "TimescaleDB:ReorderPolicy:InitialStart"
    SCHEDULE_INTERVAL = "TimescaleDB:ReorderPolicy:ScheduleInterval"
    MAX_RUNTIME = "TimescaleDB:ReorderPolicy:MaxRuntime"
    MAX_RETRIES = "TimescaleDB:ReorderPolicy:MaxRetries"
    RETRY_PERIOD = "TimescaleDB:ReorderPolicy:RetryPeriod"


class ContinuousAggregateKeys:
    """Metadata keys describing a continuous aggregate."""
    MATERIALIZED_VIEW_NAME = "TimescaleDB:MaterializedViewName"
    PARENT_NAME = "TimescaleDB:ParentName"
    CHUNK_INTERVAL = "TimescaleDB:ChunkInterval"
    WITH_NO_DATA = "TimescaleDB:WithNoData"
    CREATE_GROUP_INDEXES = "TimescaleDB:CreateGroupIndexes"
    MATERIALIZED_ONLY = "TimescaleDB:MaterializedOnly"
    TIME_BUCKET_WIDTH = "TimescaleDB:TimeBucket:BucketWidth"
    TIME_BUCKET_SOURCE_COLUMN = "TimescaleDB:TimeBucket:SourceColumn"
    TIME_BUCKET_GROUP_BY = "TimescaleDB:TimeBucket:GroupBy"
    AGGREGATE_FUNCTIONS = "TimescaleDB:AggregateFunctions"
    WHERE_CLAUSE = "TimescaleDB:WhereClause"
    GROUP_BY_COLUMNS = "TimescaleDB:GroupByColumns"


class RefreshPolicyKeys:
    """Metadata keys describing a continuous aggregate refresh policy."""
    HAS_REFRESH_POLICY = "TimescaleDB:ContinuousAggregatePolicy:HasRefreshPolicy"
    START_OFFSET = "TimescaleDB:ContinuousAggregatePolicy:StartOffset"
    END_OFFSET = "TimescaleDB:ContinuousAggregatePolicy:EndOffset"
    SCHEDULE_INTERVAL = "TimescaleDB:ContinuousAggregatePolicy:ScheduleInterval"
    INITIAL_START = "TimescaleDB:ContinuousAggregatePolicy:InitialStart"
    IF_NOT_EXISTS = "TimescaleDB:ContinuousAggregatePolicy:IfNotExists"
    TIMEZONE = "TimescaleDB:ContinuousAggregatePolicy:Timezone"
    INCLUDE_TIERED_DATA = "TimescaleDB:ContinuousAggregatePolicy:IncludeTieredData"
    BUCKETS_PER_BATCH = "TimescaleDB:ContinuousAggregatePolicy:BucketsPerBatch"
    MAX_BATCHES_PER_EXECUTION = "TimescaleDB:ContinuousAggregatePolicy:MaxBatchesPerExecution"
    REFRESH_NEWEST_FIRST = "TimescaleDB:ContinuousAggregatePolicy:RefreshNewestFirst"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DimensionType",
    "AggregateFunctionType",
    "QuoteMode",
    "HypertableKeys",
    "ReorderPolicyKeys",
    "ContinuousAggregateKeys",
    "RefreshPolicyKeys",
]
