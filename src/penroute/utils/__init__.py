"""Utility functions for penroute.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics collection
"""

from penroute.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
