"""Utility functions for glyphsdf.

This module provides utility functions including:

- Logging setup and configuration
- Progress and statistics tracking for batch runs
"""

from glyphsdf.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
