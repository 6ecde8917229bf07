# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Foundation - Error taxonomy
# PURPOSE: Configuration, unsupported-input, and dispatch errors
# CREATED: 18 OCT 2026
# ============================================================================
"""
Error taxonomy for the feature engine.

- ConfigurationError: raised while a descriptor is constructed (bad timestamp,
  batch size out of range). Raised inside pydantic validators, so callers see
  it wrapped in a pydantic ValidationError; both are ValueErrors.
- UnsupportedAggregateFunctionError: raised while generating SQL.
- UnsupportedOperationError: the orchestrator has no generator for an operation.
"""

from typing import Any


class TimescaleMigrationError(Exception):
    """Base exception for the feature engine."""
    pass


class ConfigurationError(TimescaleMigrationError, ValueError):
    """Raised when a descriptor field holds an invalid value."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)


class UnsupportedAggregateFunctionError(TimescaleMigrationError, ValueError):
    """Raised when an aggregate function name has no SQL mapping."""

    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(
            f"The aggregate function '{function_name}' is not supported by the generator."
        )


class UnsupportedOperationError(TimescaleMigrationError, TypeError):
    """Raised when no generator is registered for an operation type."""

    def __init__(self, operation: Any):
        self.operation = operation
        super().__init__(f"No SQL generator registered for {type(operation).__name__}")


__all__ = [
    "TimescaleMigrationError",
    "ConfigurationError",
    "UnsupportedAggregateFunctionError",
    "UnsupportedOperationError",
]
