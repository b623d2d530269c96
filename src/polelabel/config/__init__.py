"""Configuration management for polelabel.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- SearchConfig: Precision and frontier ordering for the pole search
- ProcessingConfig: Batch labeling settings
- OutputConfig: Label file output settings
- LoggingConfig: Logging settings
- PolelabelSettings: Main application settings
"""

from polelabel.config.settings import (
    LOG_LEVELS,
    LoggingConfig,
    OutputConfig,
    PolelabelSettings,
    ProcessingConfig,
    QueuePriority,
    SearchConfig,
    get_default_settings,
)

__all__ = [
    "LOG_LEVELS",
    "LoggingConfig",
    "OutputConfig",
    "PolelabelSettings",
    "ProcessingConfig",
    "QueuePriority",
    "SearchConfig",
    "get_default_settings",
]
