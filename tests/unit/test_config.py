"""Unit tests for configuration settings."""

import pytest
from pydantic import ValidationError

from polelabel.config import (
    LoggingConfig,
    OutputConfig,
    PolelabelSettings,
    ProcessingConfig,
    QueuePriority,
    SearchConfig,
    get_default_settings,
)


class TestSearchConfig:
    """Tests for SearchConfig."""

    def test_defaults(self) -> None:
        """Test default precision and priority."""
        config = SearchConfig()
        assert config.precision == 1.0
        assert config.priority == QueuePriority.DISTANCE

    @pytest.mark.parametrize("precision", [0.0, -1.0, float("inf"), float("nan")])
    def test_precision_must_be_positive_finite(self, precision: float) -> None:
        """Test precision validation."""
        with pytest.raises(ValidationError):
            SearchConfig(precision=precision)

    def test_priority_from_string(self) -> None:
        """Test priority parses from its value."""
        assert SearchConfig(priority="upper_bound").priority == QueuePriority.UPPER_BOUND  # type: ignore[arg-type]

    def test_round_trip(self) -> None:
        """Test the dump used for worker processes rebuilds the config."""
        config = SearchConfig(precision=0.25, priority=QueuePriority.UPPER_BOUND)
        assert SearchConfig(**config.model_dump()) == config


class TestOtherConfig:
    """Tests for processing, output and top-level settings."""

    def test_workers_must_be_positive(self) -> None:
        """Test worker count validation."""
        with pytest.raises(ValidationError):
            ProcessingConfig(max_workers=0)

    def test_round_value(self) -> None:
        """Test optional output rounding."""
        assert OutputConfig().round_value(1.23456) == 1.23456
        assert OutputConfig(coordinate_digits=1).round_value(1.26) == 1.3

    def test_default_settings(self) -> None:
        """Test aggregated defaults."""
        settings = get_default_settings()
        assert isinstance(settings, PolelabelSettings)
        assert settings.processing.skip_invalid is True
        assert settings.logging.log_file is None
        assert settings.logging.log_level == "WARNING"

    @pytest.mark.parametrize("field", ["log_level", "file_log_level"])
    @pytest.mark.parametrize("level", ["VERBOSE", "debug", ""])
    def test_log_level_must_be_known(self, field: str, level: str) -> None:
        """Test unknown logging levels are rejected at configuration time."""
        with pytest.raises(ValidationError):
            LoggingConfig(**{field: level})

    def test_log_level_accepts_standard_names(self) -> None:
        """Test every standard level name is accepted."""
        for level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            assert LoggingConfig(log_level=level, file_log_level=level).log_level == level
