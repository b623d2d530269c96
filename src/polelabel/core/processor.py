"""Batch labeling orchestration.

This module labels every polygon of a document, either in-process or in
parallel with ProcessPoolExecutor, and writes the label points.

Key components:
- label_polygon: Top-level picklable function for parallel execution
- LabelProcessor: Main orchestrator class for labeling a polygon file
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from polelabel.config import PolelabelSettings, SearchConfig
from polelabel.core.search import PoleSearch
from polelabel.domain import Coordinate
from polelabel.exceptions import PolygonError, PolygonFormatError, ProcessingCancelledError
from polelabel.io import LabelWriter, PolygonReader
from polelabel.io.converter import PolygonRecord, to_polygon
from polelabel.utils import LabelingLogger, LabelingStats, configure_logging

ProgressCallback = Callable[[int, int, str, bool], None]


def label_polygon(
    coordinates: list[Any],
    config_dict: dict[str, Any],
    label_id: str = "",
) -> dict[str, Any]:
    """Search a single polygon for its label point.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        coordinates: Nested [x, y] lists, outer ring first, rings closed
        config_dict: Serialized search configuration
        label_id: Identifier of the polygon, echoed in the result

    Returns:
        Dictionary containing either:
        - Success: {"label_id", "point": [x, y], "distance", "probes", "duration_ms"}
        - Error: {"label_id", "error": str, "traceback": str, "duration_ms"}
    """
    start_time = time.time()

    try:
        search = PoleSearch(SearchConfig(**config_dict))
        result = search.run(coordinates)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "label_id": label_id,
            "point": result.point.to_list(),
            "distance": result.distance,
            "probes": result.stats.cells_probed,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "label_id": label_id,
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


@dataclass(frozen=True)
class LabelResult:
    """A labeled polygon."""

    label_id: str
    point: Coordinate
    distance: float
    probes: int
    duration_ms: float
    properties: dict[str, Any] = field(default_factory=dict)


class LabelProcessor:
    """Orchestrates labeling of polygon documents.

    Manages the complete workflow:
    1. Load the polygon document
    2. Validate polygons, skipping malformed ones if configured
    3. Search each polygon, in-process or with worker processes
    4. Collect results and update statistics
    5. Save label points

    Example:
        processor = LabelProcessor(PolelabelSettings())
        stats = processor.process(
            input_path=Path("lakes.geojson"),
            output_path=Path("lakes-labels.geojson"),
            max_workers=4,
        )
    """

    def __init__(self, config: PolelabelSettings) -> None:
        """Initialize label processor with configuration.

        Args:
            config: Polelabel settings containing search and processing config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
        )

    def label(
        self,
        input_path: Path,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> tuple[list[LabelResult], LabelingStats]:
        """Label every polygon in a document without writing output.

        Args:
            input_path: Path to a JSON or GeoJSON polygon document
            max_workers: Maximum worker processes (None = config default,
                1 = run in-process)
            progress_callback: Optional callback(completed, total, label_id, success)

        Returns:
            Tuple of (results in document order, statistics)

        Raises:
            FileNotFoundError: If the document does not exist
            PolygonLoadError: If the document cannot be read
            PolygonFormatError: If the document is invalid, or a polygon is
                malformed and skip_invalid is off
            ProcessingCancelledError: If processing is cancelled by user
        """
        labeling_logger = LabelingLogger(self.logger)
        stats = labeling_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting labeling",
            input=str(input_path),
            precision=self.config.search.precision,
            priority=self.config.search.priority.value,
            max_workers=max_workers,
        )

        reader = PolygonReader(input_path)
        reader.load()
        try:
            tasks = self._collect_tasks(reader, labeling_logger)
        finally:
            reader.close()

        self.logger.info(
            "Polygons loaded",
            total=len(tasks) + stats.skipped_count,
            to_process=len(tasks),
            skipped=stats.skipped_count,
        )

        if not tasks:
            results: dict[str, dict[str, Any]] = {}
            self.logger.info("No polygons to process")
        elif max_workers == 1 or len(tasks) == 1:
            results = self._label_sequential(tasks, labeling_logger, progress_callback)
        else:
            results = self._label_parallel(
                tasks, max_workers, labeling_logger, progress_callback
            )

        labels = [
            LabelResult(
                label_id=record.label_id,
                point=Coordinate(*results[record.label_id]["point"]),
                distance=results[record.label_id]["distance"],
                probes=results[record.label_id]["probes"],
                duration_ms=results[record.label_id]["duration_ms"],
                properties=record.properties,
            )
            for record, _ in tasks
            if record.label_id in results
        ]

        stats.end_time = time.time()
        self.logger.info(
            "Labeling complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            probes=stats.cells_probed,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return labels, stats

    def process(
        self,
        input_path: Path,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> LabelingStats:
        """Label a polygon document and write the label points.

        Args:
            input_path: Path to a JSON or GeoJSON polygon document
            output_path: Path for the label file (auto-generated if None)
            max_workers: Maximum worker processes (None = config default,
                1 = run in-process)
            progress_callback: Optional callback(completed, total, label_id, success)

        Returns:
            LabelingStats with counts, timing, and error details

        Raises:
            LabelSaveError: If the label file cannot be written
        """
        if output_path is None:
            output_path = LabelWriter.get_labels_path(input_path)

        labels, stats = self.label(input_path, max_workers, progress_callback)

        writer = LabelWriter(output_path, self.config.output)
        for item in labels:
            writer.add(
                item.label_id,
                item.point,
                distance=item.distance,
                precision=self.config.search.precision,
                properties=item.properties,
            )
        writer.save()

        self.logger.info("Labels saved", output=str(output_path), labels=len(labels))
        return stats

    def _collect_tasks(
        self, reader: PolygonReader, labeling_logger: LabelingLogger
    ) -> list[tuple[PolygonRecord, list[Any]]]:
        """Validate records and pair each with its normalized coordinates."""
        tasks: list[tuple[PolygonRecord, list[Any]]] = []
        seen: set[str] = set()

        for record in reader.records:
            if record.label_id in seen:
                labeling_logger.log_polygon_skipped(record.label_id, "duplicate id")
                continue
            seen.add(record.label_id)

            try:
                polygon = to_polygon(record.coordinates)
            except PolygonError as e:
                if not self.config.processing.skip_invalid:
                    raise PolygonFormatError(
                        str(reader.path), f"polygon '{record.label_id}': {e}"
                    ) from e
                labeling_logger.log_polygon_skipped(record.label_id, str(e))
                continue

            tasks.append((record, polygon.to_list()))

        return tasks

    def _record_result(
        self,
        result: dict[str, Any],
        results: dict[str, dict[str, Any]],
        labeling_logger: LabelingLogger,
    ) -> bool:
        """Store a worker result and log it. Returns True on success."""
        label_id = result["label_id"]

        if "error" in result:
            labeling_logger.log_polygon_error(
                label_id,
                error=Exception(result["error"]),
                traceback=result.get("traceback"),
            )
            return False

        results[label_id] = result
        labeling_logger.log_polygon_complete(
            label_id,
            distance=result["distance"],
            probes=result["probes"],
            duration_ms=result["duration_ms"],
        )
        return True

    def _label_sequential(
        self,
        tasks: list[tuple[PolygonRecord, list[Any]]],
        labeling_logger: LabelingLogger,
        progress_callback: ProgressCallback | None = None,
    ) -> dict[str, dict[str, Any]]:
        """Label polygons one after another in this process."""
        config_dict = self.config.search.model_dump()
        results: dict[str, dict[str, Any]] = {}
        total = len(tasks)

        for completed, (record, coordinates) in enumerate(tasks, start=1):
            labeling_logger.log_polygon_start(record.label_id)
            try:
                result = label_polygon(coordinates, config_dict, record.label_id)
            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                stats = labeling_logger.stats
                stats.was_cancelled = True
                stats.cancelled_count = total - completed + 1
                raise ProcessingCancelledError(
                    stats.processed_count, stats.cancelled_count
                ) from None

            success = self._record_result(result, results, labeling_logger)
            if progress_callback is not None:
                progress_callback(completed, total, record.label_id, success)

        return results

    def _label_parallel(
        self,
        tasks: list[tuple[PolygonRecord, list[Any]]],
        max_workers: int | None,
        labeling_logger: LabelingLogger,
        progress_callback: ProgressCallback | None = None,
    ) -> dict[str, dict[str, Any]]:
        """Label polygons in parallel using ProcessPoolExecutor."""
        config_dict = self.config.search.model_dump()
        results: dict[str, dict[str, Any]] = {}
        total = len(tasks)
        completed = 0
        pending_futures: dict = {}

        self.logger.info(
            "Starting parallel labeling",
            polygon_count=total,
            max_workers=max_workers,
        )

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for record, coordinates in tasks:
                future = executor.submit(
                    label_polygon, coordinates, config_dict, record.label_id
                )
                pending_futures[future] = record.label_id

            try:
                for future in as_completed(pending_futures):
                    label_id = pending_futures.pop(future)
                    success = False

                    try:
                        success = self._record_result(
                            future.result(), results, labeling_logger
                        )
                    except Exception as e:
                        # Executor-level error (e.g. a worker died)
                        labeling_logger.log_polygon_error(
                            label_id,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, label_id, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                stats = labeling_logger.stats
                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)
                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(
                    stats.processed_count, stats.cancelled_count
                ) from None

        return results
