"""Branch-and-bound search for the pole of inaccessibility.

The search tiles the outer ring's bounding box with square cells, seeds the
best guess with the centroid (or the bounding box center, whichever lies
deeper inside), then repeatedly pops the most promising cell from a
priority queue. Cells whose upper bound cannot beat the best distance by
more than the requested precision are pruned; all others are split into
four quadrants. The search ends when the queue is empty.

Key components:
- PoleSearch: Configured search runner returning a SearchResult
- find_pole: Convenience wrapper returning point, distance and statistics
- find_best_point: Returns only the best point
"""

import logging
import math
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from polelabel.config import QueuePriority, SearchConfig
from polelabel.core.cell import Cell, CellQueue
from polelabel.core.geometry import bounding_box, polygon_centroid
from polelabel.domain import Coordinate, Polygon, as_polygon
from polelabel.exceptions import InvalidPrecisionError

logger = logging.getLogger(__name__)

PolygonLike = Polygon | Sequence[Sequence[Sequence[Any]]]


@dataclass
class SearchStats:
    """Statistics from a single search run."""

    cells_probed: int = 0
    cells_pruned: int = 0
    cells_split: int = 0
    best_distances: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate search duration."""
        if self.start_time is not None and self.end_time is not None:
            return self.end_time - self.start_time
        return 0.0

    @property
    def improvements(self) -> int:
        """Number of times the best cell was replaced after seeding."""
        return max(len(self.best_distances) - 1, 0)


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a pole search.

    Attributes:
        point: Best point found
        distance: Signed distance from point to the polygon outline
        precision: Precision the search ran with
        stats: Counters and timing for the run
    """

    point: Coordinate
    distance: float
    precision: float
    stats: SearchStats


def validate_precision(precision: Any) -> float:
    """Check that a precision is a positive finite number.

    Args:
        precision: Value to check

    Returns:
        The precision as a float

    Raises:
        InvalidPrecisionError: If precision is not positive and finite
    """
    if isinstance(precision, bool):
        raise InvalidPrecisionError(precision)
    try:
        value = float(precision)
    except (TypeError, ValueError) as e:
        raise InvalidPrecisionError(precision) from e
    if not math.isfinite(value) or value <= 0:
        raise InvalidPrecisionError(precision)
    return value


class PoleSearch:
    """Finds the point inside a polygon farthest from its outline.

    Each run owns its own frontier and best cell, so one instance can be
    reused and shared freely.

    Example:
        search = PoleSearch(SearchConfig(precision=0.5))
        result = search.run([[(0, 0), (4, 0), (4, 2), (0, 2), (0, 0)]])
        print(result.point, result.distance)
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        """Initialize the search.

        Args:
            config: Search settings (defaults to SearchConfig())
        """
        self.config = config if config is not None else SearchConfig()

    def run(self, polygon: PolygonLike, precision: float | None = None) -> SearchResult:
        """Search a polygon for its pole of inaccessibility.

        Args:
            polygon: Polygon, or nested [x, y] sequences with the outer ring
                first and every ring explicitly closed
            precision: Override for config.precision

        Returns:
            SearchResult whose distance is within precision of the optimum

        Raises:
            InvalidPrecisionError: If precision is not positive and finite
            PolygonError: If the polygon is empty or has a degenerate ring
        """
        precision = validate_precision(
            self.config.precision if precision is None else precision
        )
        polygon = as_polygon(polygon)

        stats = SearchStats()
        stats.start_time = time.perf_counter()

        min_x, min_y, max_x, max_y = bounding_box(polygon)
        width = max_x - min_x
        height = max_y - min_y
        cell_size = min(width, height)

        if cell_size == 0:
            stats.end_time = time.perf_counter()
            logger.debug(
                "Degenerate bounding box, returning minimum corner (width=%s, height=%s)",
                width,
                height,
            )
            return SearchResult(
                point=Coordinate(min_x, min_y),
                distance=0.0,
                precision=precision,
                stats=stats,
            )

        queue = CellQueue(self.config.priority)
        self._cover(queue, polygon, min_x, min_y, max_x, max_y, cell_size)
        stats.cells_probed = len(queue)

        best = self._seed(polygon, min_x, min_y, width, height)
        stats.cells_probed += 2
        stats.best_distances.append(best.distance)

        while queue:
            cell = queue.pop()

            if cell.distance > best.distance:
                best = cell
                stats.best_distances.append(best.distance)
                logger.debug(
                    "Found better cell at (%s, %s) with distance %s after %d probes",
                    best.center.x,
                    best.center.y,
                    best.distance,
                    stats.cells_probed,
                )

            if cell.upper_bound - best.distance <= precision:
                stats.cells_pruned += 1
                continue

            for child in cell.split(polygon):
                queue.push(child)
            stats.cells_split += 1
            stats.cells_probed += 4

        stats.end_time = time.perf_counter()
        logger.debug(
            "Search complete: %d probes, %d splits, best distance %s",
            stats.cells_probed,
            stats.cells_split,
            best.distance,
        )

        return SearchResult(
            point=best.center,
            distance=best.distance,
            precision=precision,
            stats=stats,
        )

    @staticmethod
    def _cover(
        queue: CellQueue,
        polygon: Polygon,
        min_x: float,
        min_y: float,
        max_x: float,
        max_y: float,
        cell_size: float,
    ) -> None:
        """Tile [min_x, max_x) x [min_y, max_y) with square cells."""
        h = cell_size / 2
        x = min_x
        while x < max_x:
            y = min_y
            while y < max_y:
                queue.push(Cell.evaluate(x + h, y + h, h, polygon))
                y += cell_size
            x += cell_size

    @staticmethod
    def _seed(
        polygon: Polygon, min_x: float, min_y: float, width: float, height: float
    ) -> Cell:
        """Pick the initial best cell.

        The centroid is the first guess. The bounding box center replaces it
        when it lies strictly deeper, which makes rectangles exact.
        """
        centroid, _ = polygon_centroid(polygon)
        best = Cell.evaluate(centroid.x, centroid.y, 0, polygon)

        bbox_cell = Cell.evaluate(min_x + width / 2, min_y + height / 2, 0, polygon)
        if bbox_cell.distance > best.distance:
            best = bbox_cell

        return best


def find_pole(
    polygon: PolygonLike,
    precision: float | None = None,
    priority: QueuePriority | None = None,
) -> SearchResult:
    """Find the pole of inaccessibility with its distance and statistics.

    Args:
        polygon: Polygon, or nested [x, y] sequences (outer ring first)
        precision: Allowed shortfall from the true maximum distance
            (default: SearchConfig().precision)
        priority: Frontier ordering key (default: SearchConfig().priority)

    Returns:
        SearchResult for the polygon
    """
    config = SearchConfig() if priority is None else SearchConfig(priority=priority)
    return PoleSearch(config).run(polygon, precision)


def find_best_point(polygon: PolygonLike, precision: float) -> Coordinate:
    """Find the point inside a polygon farthest from any edge.

    Args:
        polygon: Polygon, or nested [x, y] sequences (outer ring first)
        precision: Allowed shortfall from the true maximum distance

    Returns:
        The best point found
    """
    return find_pole(polygon, precision).point
