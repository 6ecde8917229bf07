# ============================================================================
# SHARED MODEL HELPERS
# ============================================================================
# STATUS: Core - Validation helpers shared by descriptor models
# PURPOSE: Timestamp parsing and list normalization for descriptors
# CREATED: 18 OCT 2026
# ============================================================================
"""
Validation helpers shared by the descriptor models.

Kept outside the model classes so the same rules apply to reorder policies
and refresh policies alike.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from timescale_migrations.exceptions import ConfigurationError


def parse_initial_start(value: Any, field_name: str = "initial_start") -> Optional[datetime]:
    """
    Parse an initial-start value into a datetime.

    Accepts None, datetime instances, and ISO 8601 strings (a trailing 'Z'
    is read as UTC).

    Raises:
        ConfigurationError: If the string cannot be parsed
    """
    if value is None or isinstance(value, datetime):
        return value

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass

    raise ConfigurationError(
        f"{field_name} '{value}' is not a valid DateTime format. "
        f"Please use a valid DateTime string in ISO 8601 format (e.g., '2025-12-15T03:00:00Z').",
        field=field_name,
        value=value,
    )


def format_timestamp(value: datetime) -> str:
    """Render a datetime as a UTC ISO 8601 literal body. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def dedupe(values: Iterable[str]) -> List[str]:
    """Drop duplicates and blanks, keeping first-seen order."""
    seen = set()
    result = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def split_list(value: Any) -> Optional[List[str]]:
    """Accept a list or a comma-separated string; None stays None."""
    if value is None:
        return None
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(part) for part in value]


def is_integer_literal(value: Optional[str]) -> bool:
    """True when the interval string is a bare integer (raw time units)."""
    if value is None:
        return False
    try:
        int(value.strip())
    except ValueError:
        return False
    return True


__all__ = [
    "parse_initial_start",
    "format_timestamp",
    "dedupe",
    "split_list",
    "is_integer_literal",
]
