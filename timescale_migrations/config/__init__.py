# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides the injectable defaults object for the feature engine.
"""

from timescale_migrations.config.defaults import (
    TimescaleDefaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "TimescaleDefaults",
    "get_defaults",
    "reset_defaults",
]
