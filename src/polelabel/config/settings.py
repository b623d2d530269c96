"""Configuration settings for Polelabel."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class QueuePriority(str, Enum):
    """Key used to order the search frontier.

    DISTANCE pops the cell whose center is farthest inside the polygon.
    UPPER_BOUND pops the cell with the greatest potential distance, which
    usually needs fewer probes to converge on the same answer.
    """

    DISTANCE = "distance"
    UPPER_BOUND = "upper_bound"


class SearchConfig(BaseModel):
    """Configuration for the pole of inaccessibility search."""

    precision: float = Field(
        default=1.0,
        gt=0.0,
        allow_inf_nan=False,
        description="Maximum shortfall of the returned distance from the true optimum",
    )
    priority: QueuePriority = Field(
        default=QueuePriority.DISTANCE,
        description="Key used to pick the next cell from the frontier",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch labeling."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker processes (None = auto, 1 = run in-process)",
    )
    skip_invalid: bool = Field(
        default=True,
        description="Skip polygons that fail to parse instead of aborting the run",
    )


class OutputConfig(BaseModel):
    """Configuration for written label files."""

    coordinate_digits: int | None = Field(
        default=None,
        ge=0,
        le=15,
        description="Round written coordinates to this many decimals (None = full precision)",
    )

    def round_value(self, value: float) -> float:
        """Round a coordinate or distance for output.

        Args:
            value: Value to round

        Returns:
            Rounded value, or the value unchanged if no rounding is configured
        """
        if self.coordinate_digits is None:
            return value
        return round(value, self.coordinate_digits)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_LEVEL_PATTERN = "^(" + "|".join(LOG_LEVELS) + ")$"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        pattern=_LOG_LEVEL_PATTERN,
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        pattern=_LOG_LEVEL_PATTERN,
        description="File log level (more verbose)",
    )


class PolelabelSettings(BaseModel):
    """Main application settings."""

    search: SearchConfig = Field(default_factory=SearchConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PolelabelSettings:
    """Get default application settings."""
    return PolelabelSettings()
