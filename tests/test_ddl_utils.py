# ============================================================================
# DDL UTILITY TESTS
# ============================================================================
# STATUS: Tests - Statement formatting helpers
# PURPOSE: Verify quoting modes, regclass literals and the edition guard
# CREATED: 18 OCT 2026
# ============================================================================
"""
DDL Utility Tests

Run with:
    pytest tests/test_ddl_utils.py -v
"""

import pytest
from datetime import datetime, timezone

from timescale_migrations.contracts import QuoteMode
from timescale_migrations.schema.ddl_utils import (
    COMMUNITY_SKIP_WARNING,
    SqlBuilderHelper,
    wrap_community_features,
)


# ============================================================================
# QUOTING
# ============================================================================


class TestRuntimeQuoting:
    def setup_method(self):
        self.helper = SqlBuilderHelper(QuoteMode.RUNTIME)

    def test_identifier(self):
        assert self.helper.identifier("Metrics") == '"Metrics"'

    def test_identifier_escapes_quotes(self):
        assert self.helper.identifier('we"ird') == '"we""ird"'

    def test_qualified_identifier(self):
        assert self.helper.qualified_identifier("Metrics", "public") == '"public"."Metrics"'

    def test_qualified_identifier_without_schema(self):
        assert self.helper.qualified_identifier("Metrics") == '"Metrics"'

    def test_regclass(self):
        assert self.helper.regclass("Metrics", "public") == "'public.\"Metrics\"'"

    def test_column_list(self):
        assert self.helper.column_list(["a", "B"]) == '"a", "B"'


class TestScriptQuoting:
    def setup_method(self):
        self.helper = SqlBuilderHelper(QuoteMode.SCRIPT)

    def test_quote(self):
        assert self.helper.quote == '""'

    def test_identifier_doubles_quotes(self):
        assert self.helper.identifier("Metrics") == '""Metrics""'

    def test_regclass(self):
        assert self.helper.regclass("Metrics", "public") == "'public.\"\"Metrics\"\"'"

    def test_qualified_identifier(self):
        assert self.helper.qualified_identifier("Metrics", "public") == '""public"".""Metrics""'


# ============================================================================
# LITERALS
# ============================================================================


class TestLiterals:
    def setup_method(self):
        self.helper = SqlBuilderHelper()

    def test_literal_doubles_single_quotes(self):
        assert SqlBuilderHelper.literal("it's") == "'it''s'"

    def test_boolean(self):
        assert SqlBuilderHelper.boolean(True) == "true"
        assert SqlBuilderHelper.boolean(False) == "false"

    @pytest.mark.parametrize("value,cast,expected", [
        ("7 days", None, "INTERVAL '7 days'"),
        ("7 days", "bigint", "INTERVAL '7 days'"),
        ("86400000000", "bigint", "86400000000::bigint"),
        ("1000", None, "1000"),
    ])
    def test_interval(self, value, cast, expected):
        assert self.helper.interval(value, integer_cast=cast) == expected

    def test_timestamp(self):
        value = datetime(2025, 10, 20, 12, 30, tzinfo=timezone.utc)
        assert self.helper.timestamp(value) == "'2025-10-20T12:30:00.000000Z'"


# ============================================================================
# EDITION GUARD
# ============================================================================


class TestWrapCommunityFeatures:
    def test_block_layout(self):
        block = wrap_community_features(["SET timescaledb.enable_chunk_skipping = 'ON';"])
        lines = block.split("\n")
        assert lines[0] == "DO $$"
        assert lines[1] == "DECLARE"
        assert lines[4] == "    license := current_setting('timescaledb.license', true);"
        assert lines[6] == "    IF license IS NULL OR license != 'apache' THEN"
        assert lines[7] == "        EXECUTE 'SET timescaledb.enable_chunk_skipping = ''ON''';"
        assert lines[8] == "    ELSE"
        assert lines[9] == f"        RAISE WARNING '{COMMUNITY_SKIP_WARNING}';"
        assert lines[-1] == "END $$;"

    def test_statements_keep_order(self):
        block = wrap_community_features(["SELECT 1;", "SELECT 2;"])
        assert block.index("EXECUTE 'SELECT 1'") < block.index("EXECUTE 'SELECT 2'")
