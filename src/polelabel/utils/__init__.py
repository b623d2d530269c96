"""Utility functions for polelabel.

This module provides logging setup and run statistics for batch labeling.
"""

from polelabel.utils.logging import (
    LabelingLogger,
    LabelingStats,
    configure_logging,
)

__all__ = [
    "LabelingLogger",
    "LabelingStats",
    "configure_logging",
]
