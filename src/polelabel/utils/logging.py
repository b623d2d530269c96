"""Logging utilities for Polelabel."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_NAMES = frozenset({"polelabel-file", "polelabel-console"})


@dataclass
class LabelingStats:
    """Statistics from a batch labeling run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    cells_probed: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    polygon_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_polygon_time_ms(self) -> float | None:
        """Average per-polygon search time, if any polygon was labeled."""
        if not self.polygon_timings_ms:
            return None
        return sum(self.polygon_timings_ms) / len(self.polygon_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces our handlers instead of stacking duplicates
    for handler in list(root_logger.handlers):
        if handler.get_name() in _HANDLER_NAMES:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name("polelabel-file")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.set_name("polelabel-console")
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("polelabel")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class LabelingLogger:
    """Logger for tracking labeling progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = LabelingStats()

    def log_polygon_start(self, label_id: str) -> None:
        """Log start of polygon labeling."""
        self._logger.debug("Labeling polygon", polygon=label_id)

    def log_polygon_complete(
        self,
        label_id: str,
        distance: float,
        probes: int,
        duration_ms: float,
    ) -> None:
        """Log successful polygon labeling."""
        self._logger.info(
            "Polygon labeled",
            polygon=label_id,
            distance=round(distance, 4),
            probes=probes,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.cells_probed += probes
        self._stats.polygon_timings_ms.append(duration_ms)

    def log_polygon_skipped(self, label_id: str, reason: str) -> None:
        """Log skipped polygon."""
        self._logger.warning("Polygon skipped", polygon=label_id, reason=reason)
        self._stats.skipped_count += 1

    def log_polygon_error(
        self,
        label_id: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log polygon labeling error."""
        self._logger.error(
            "Polygon labeling failed",
            polygon=label_id,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((label_id, str(error)))

    @property
    def stats(self) -> LabelingStats:
        """Get current labeling statistics."""
        return self._stats
