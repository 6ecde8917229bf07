# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Diff and generation logging with migration context
# PURPOSE: Tag every record with the migration, feature, table and operation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Structured Logging

Every record logged through get_logger() carries the current diff context:

    migration_id  set by MigrationService.get_differences
    feature       set by FeatureDiffer.get_differences
    operation     set by MigrationService.generate
    table         table or view the operation targets

Usage:
    from timescale_migrations.logging import get_logger, log_context

    logger = get_logger("features.hypertable_differ")

    with log_context(feature="hypertable", table="Metrics"):
        logger.warning("Ignoring removal of hypertable dimensions", extra={"dimensions": ["DeviceId"]})

configure_logging() installs a JSON formatter (one object per line, for CI
logs) or a single-line human formatter on the root logger.
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Union

CONTEXT_FIELDS = ("migration_id", "feature", "table", "operation")


@dataclass(frozen=True)
class LogContext:
    """Diff context active on the current thread."""
    migration_id: Optional[str] = None
    feature: Optional[str] = None
    table: Optional[str] = None
    operation: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Set fields only, in declaration order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


_state = threading.local()


def _stack() -> List[LogContext]:
    if not hasattr(_state, "stack"):
        _state.stack = [LogContext()]
    return _state.stack


def get_current_context() -> LogContext:
    return _stack()[-1]


@contextmanager
def log_context(**values: Optional[str]) -> Iterator[LogContext]:
    """
    Narrow the current context for the duration of the block.

    Fields passed as None keep the enclosing value.

    Raises:
        TypeError: A keyword is not one of CONTEXT_FIELDS
    """
    unknown = set(values) - set(CONTEXT_FIELDS)
    if unknown:
        raise TypeError(f"Unknown log context field(s): {', '.join(sorted(unknown))}")

    updates = {key: value for key, value in values.items() if value is not None}
    context = replace(get_current_context(), **updates)
    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


# ============================================================================
# ADAPTER
# ============================================================================

class ContextLogger(logging.LoggerAdapter):
    """
    Attach the active LogContext and the call's extra dict to each record.

    Formatters read them back as record.context and record.data.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {
            "context": get_current_context().to_dict(),
            "data": dict(kwargs.get("extra") or {}),
        }
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Context-aware logger under the timescale_migrations namespace."""
    return ContextLogger(logging.getLogger(f"timescale_migrations.{name}"), {})


# ============================================================================
# FORMATTERS
# ============================================================================

def _record_context(record: logging.LogRecord) -> Dict[str, str]:
    # Records from plain stdlib loggers carry no context attribute
    return getattr(record, "context", None) or get_current_context().to_dict()


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; context fields sit at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_record_context(record))

        data = getattr(record, "data", None)
        if data:
            payload["data"] = data
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """
    Single-line output for local runs:

        WARNING  timescale_migrations.schema.hypertable_sql [feature=hypertable table=Metrics]: ... dimensions=['DeviceId']
    """

    def format(self, record: logging.LogRecord) -> str:
        context = _record_context(record)
        scope = " ".join(f"{key}={value}" for key, value in context.items())
        line = f"{record.levelname:<8} {record.name}"
        if scope:
            line += f" [{scope}]"
        line += f": {record.getMessage()}"

        data = getattr(record, "data", None)
        if data:
            line += " " + " ".join(f"{key}={value}" for key, value in data.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Level name or number
        json_output: JSON lines instead of human output; LOG_FORMAT=json
                     forces it as well
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)


__all__ = [
    "CONTEXT_FIELDS",
    "LogContext",
    "ContextLogger",
    "StructuredFormatter",
    "HumanFormatter",
    "get_logger",
    "get_current_context",
    "log_context",
    "configure_logging",
]
