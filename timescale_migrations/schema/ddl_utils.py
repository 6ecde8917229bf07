# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - Shared SQL formatting for TimescaleDB statement generators
# PURPOSE: Identifier quoting, regclass literals, interval literals, edition guard
# CREATED: 18 OCT 2026
# EXPORTS: SqlBuilderHelper, wrap_community_features
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Formatting.

Generators return plain statement strings rather than sql.Composed objects:
the statements end up in migration scripts and must be byte-identical on
every run. psycopg.sql is still used for identifier quoting so that names
containing quotes or mixed case are escaped the way PostgreSQL expects.

Two quoting modes exist (see QuoteMode): RUNTIME output is executed as-is,
SCRIPT output is embedded in a verbatim string literal of a generated
migration file, so every double quote is doubled.

Usage:
    from timescale_migrations.schema.ddl_utils import SqlBuilderHelper

    helper = SqlBuilderHelper()
    helper.regclass("Metrics", "public")            # 'public."Metrics"'
    helper.qualified_identifier("Metrics", "public") # "public"."Metrics"
    helper.interval("7 days")                        # INTERVAL '7 days'
"""

from typing import Iterable, List, Optional

from psycopg import sql

from timescale_migrations.contracts import QuoteMode
from timescale_migrations.models.common import format_timestamp, is_integer_literal


class SqlBuilderHelper:
    """
    Formatting helper bound to one quoting mode.

    All methods return str.
    """

    def __init__(self, quote_mode: QuoteMode = QuoteMode.RUNTIME):
        self.quote_mode = quote_mode

    @property
    def quote(self) -> str:
        """The double-quote sequence for the current mode."""
        return '""' if self.quote_mode == QuoteMode.SCRIPT else '"'

    def _escape_for_mode(self, text: str) -> str:
        if self.quote_mode == QuoteMode.SCRIPT:
            return text.replace('"', '""')
        return text

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    def identifier(self, name: str) -> str:
        """Quote a single identifier: "Metrics"."""
        return self._escape_for_mode(sql.Identifier(name).as_string(None))

    def qualified_identifier(self, name: str, schema: Optional[str] = None) -> str:
        """Schema-qualified identifier: "public"."Metrics"."""
        if schema:
            rendered = sql.Identifier(schema, name).as_string(None)
        else:
            rendered = sql.Identifier(name).as_string(None)
        return self._escape_for_mode(rendered)

    def regclass(self, name: str, schema: Optional[str] = None) -> str:
        """
        Regclass text literal for procedure arguments: 'public."Metrics"'.

        The schema is left unquoted, the table name is quoted so that
        mixed-case names resolve.
        """
        target = self.identifier(name)
        if schema:
            target = f"{schema}.{target}"
        return self.literal(target)

    def column_list(self, columns: Iterable[str]) -> str:
        """Comma-separated quoted identifiers: "a", "b"."""
        return ", ".join(self.identifier(column) for column in columns)

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    @staticmethod
    def literal(value: str) -> str:
        """Single-quoted string literal with embedded quotes doubled."""
        return "'" + value.replace("'", "''") + "'"

    @staticmethod
    def boolean(value: bool) -> str:
        return "true" if value else "false"

    def interval(self, value: str, integer_cast: Optional[str] = None) -> str:
        """
        Interval argument.

        Bare integers pass through (optionally cast, e.g. 5000::bigint);
        anything else becomes INTERVAL '<value>'.
        """
        if is_integer_literal(value):
            number = str(int(value.strip()))
            return f"{number}::{integer_cast}" if integer_cast else number
        return f"INTERVAL {self.literal(value)}"

    def timestamp(self, value) -> str:
        """UTC timestamp literal: '2025-10-20T12:30:00.000000Z'."""
        return self.literal(format_timestamp(value))


# ============================================================================
# EDITION GUARD
# ============================================================================

COMMUNITY_SKIP_WARNING = (
    "Skipping Community Edition features (compression, chunk skipping) "
    "- not available in Apache Edition"
)


def wrap_community_features(statements: List[str]) -> str:
    """
    Wrap Community Edition statements in a license check.

    The DO block runs each statement through EXECUTE when the
    timescaledb.license setting is not 'apache', and raises a warning
    instead of failing on the Apache Edition. Trailing semicolons are
    dropped and single quotes doubled for the EXECUTE string.
    """
    lines = [
        "DO $$",
        "DECLARE",
        "    license TEXT;",
        "BEGIN",
        "    license := current_setting('timescaledb.license', true);",
        "    ",
        "    IF license IS NULL OR license != 'apache' THEN",
    ]
    for statement in statements:
        body = statement.rstrip()
        if body.endswith(";"):
            body = body[:-1]
        lines.append(f"        EXECUTE {SqlBuilderHelper.literal(body)};")
    lines.extend([
        "    ELSE",
        f"        RAISE WARNING {SqlBuilderHelper.literal(COMMUNITY_SKIP_WARNING)};",
        "    END IF;",
        "END $$;",
    ])
    return "\n".join(lines)


__all__ = ["SqlBuilderHelper", "wrap_community_features", "COMMUNITY_SKIP_WARNING"]
