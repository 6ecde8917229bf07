# ============================================================================
# FEATURE DIFFER BASE
# ============================================================================
# STATUS: Core - Abstract base for per-feature differs
# PURPOSE: Extract descriptors from two snapshots and diff them
# CREATED: 18 OCT 2026
# EXPORTS: FeatureDiffer
# ============================================================================
"""
Feature differ base class.

A differ pairs an extractor (snapshot -> descriptors) with a diff
(source descriptors, target descriptors -> operations). Subclasses
implement both; get_differences wires them together with logging context.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from timescale_migrations.config import TimescaleDefaults, get_defaults
from timescale_migrations.logging import get_logger, log_context
from timescale_migrations.models.snapshot import SchemaSnapshot
from timescale_migrations.operations.base import MigrationOperation

logger = get_logger("features.base")


class FeatureDiffer(ABC):
    """
    Base class for feature differs.

    Subclasses set `feature` and implement extract() and diff().
    """

    feature: str = ""

    def __init__(self, defaults: Optional[TimescaleDefaults] = None):
        self.defaults = defaults or get_defaults()

    @abstractmethod
    def extract(self, snapshot: Optional[SchemaSnapshot]) -> List[Any]:
        """Read this feature's descriptors from a snapshot (None yields [])."""
        ...

    @abstractmethod
    def diff(self, source: Sequence[Any], target: Sequence[Any]) -> List[MigrationOperation]:
        """Compute the operations that move source to target."""
        ...

    def get_differences(
        self,
        source: Optional[SchemaSnapshot],
        target: Optional[SchemaSnapshot],
    ) -> List[MigrationOperation]:
        """Extract from both snapshots and diff."""
        with log_context(feature=self.feature):
            source_descriptors = self.extract(source)
            target_descriptors = self.extract(target)
            operations = self.diff(source_descriptors, target_descriptors)
            logger.debug(
                "Feature diff complete",
                extra={
                    "source_count": len(source_descriptors),
                    "target_count": len(target_descriptors),
                    "operations": [op.operation_name for op in operations],
                },
            )
        return operations


__all__ = ["FeatureDiffer"]
