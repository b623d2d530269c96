"""Unit tests for the pole of inaccessibility search."""

import logging
import math

import pytest

from polelabel.config import QueuePriority, SearchConfig
from polelabel.core.search import PoleSearch, find_best_point, find_pole, validate_precision
from polelabel.domain import Coordinate, Polygon
from polelabel.exceptions import DegenerateRingError, EmptyPolygonError, InvalidPrecisionError

RECTANGLE = [[(0, 0), (4, 0), (4, 2), (0, 2), (0, 0)]]


class TestValidatePrecision:
    """Tests for validate_precision."""

    def test_accepts_positive(self) -> None:
        """Test positive numbers are returned as floats."""
        assert validate_precision(1) == 1.0
        assert validate_precision(0.001) == 0.001

    @pytest.mark.parametrize("value", [0, -1.0, math.nan, math.inf, "fine", None, True])
    def test_rejects_invalid(self, value: object) -> None:
        """Test non-positive, non-finite and non-numeric values."""
        with pytest.raises(InvalidPrecisionError):
            validate_precision(value)


class TestFindBestPoint:
    """Tests for find_best_point."""

    def test_returns_coordinate(self) -> None:
        """Test the result type."""
        assert isinstance(find_best_point(RECTANGLE, 1.0), Coordinate)

    def test_accepts_polygon(self) -> None:
        """Test a Polygon and raw sequences give the same answer."""
        polygon = Polygon.from_coordinates(RECTANGLE)
        assert find_best_point(polygon, 1.0) == find_best_point(RECTANGLE, 1.0)

    @pytest.mark.parametrize("precision", [0.001, 0.1, 1.0, 10.0])
    def test_rectangle_center(self, precision: float) -> None:
        """Test a rectangle resolves exactly to its center."""
        assert find_best_point(RECTANGLE, precision) == Coordinate(2.0, 1.0)

    def test_collinear_ring(self) -> None:
        """Test a zero-height ring returns its minimum corner without searching."""
        polygon = [[(0, 0), (1, 0), (2, 0), (0, 0)]]
        assert find_best_point(polygon, 1.0) == Coordinate(0.0, 0.0)

    def test_self_touching_ring(self) -> None:
        """Test a zero-area ring with a non-empty box falls back to its first vertex."""
        polygon = [[(0, 0), (1, 0), (1, 1), (1, 0), (0, 0)]]
        assert find_best_point(polygon, 1.0) == Coordinate(0.0, 0.0)

    def test_empty_polygon(self) -> None:
        """Test fail-fast on an empty polygon."""
        with pytest.raises(EmptyPolygonError):
            find_best_point([], 1.0)

    def test_single_point_ring(self) -> None:
        """Test fail-fast on a ring without edges."""
        with pytest.raises(DegenerateRingError):
            find_best_point([[(1, 1)]], 1.0)

    def test_invalid_precision(self) -> None:
        """Test precision is validated before searching."""
        with pytest.raises(InvalidPrecisionError):
            find_best_point(RECTANGLE, 0.0)


class TestPoleSearch:
    """Tests for PoleSearch."""

    def test_default_config(self) -> None:
        """Test default precision and priority."""
        search = PoleSearch()
        assert search.config.precision == 1.0
        assert search.config.priority == QueuePriority.DISTANCE

    def test_result_fields(self) -> None:
        """Test the result carries point, distance and precision."""
        result = PoleSearch(SearchConfig(precision=0.5)).run(RECTANGLE)
        assert result.point == Coordinate(2.0, 1.0)
        assert result.distance == 1.0
        assert result.precision == 0.5

    def test_precision_override(self) -> None:
        """Test run() precision takes precedence over config."""
        result = PoleSearch(SearchConfig(precision=0.5)).run(RECTANGLE, precision=2.0)
        assert result.precision == 2.0

    def test_every_popped_cell_is_pruned_or_split(self) -> None:
        """Test the frontier drains: pops equal initial tiles plus children."""
        result = find_pole(RECTANGLE, 0.01)
        stats = result.stats
        initial_tiles = 2
        assert stats.cells_pruned + stats.cells_split == initial_tiles + 4 * stats.cells_split
        assert stats.cells_probed == initial_tiles + 2 + 4 * stats.cells_split

    def test_smaller_precision_splits_more(self) -> None:
        """Test tightening the precision drills deeper."""
        coarse = find_pole(RECTANGLE, 1.0).stats
        fine = find_pole(RECTANGLE, 0.01).stats
        assert fine.cells_split > coarse.cells_split

    def test_degenerate_stats(self) -> None:
        """Test no cells are probed for a zero-area bounding box."""
        result = find_pole([[(0, 0), (0, 3), (0, 0)]], 1.0)
        assert result.point == Coordinate(0.0, 0.0)
        assert result.distance == 0.0
        assert result.stats.cells_probed == 0

    def test_timing_recorded(self) -> None:
        """Test duration is measured."""
        stats = find_pole(RECTANGLE, 0.1).stats
        assert stats.start_time is not None
        assert stats.end_time is not None
        assert stats.duration_seconds >= 0.0

    def test_logs_completion(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test search progress is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="polelabel.core.search"):
            find_pole(RECTANGLE, 0.5)
        assert any("Search complete" in r.getMessage() for r in caplog.records)

    def test_instance_reusable(self) -> None:
        """Test a search object holds no state between runs."""
        search = PoleSearch(SearchConfig(precision=0.1))
        first = search.run(RECTANGLE)
        search.run([[(0, 0), (9, 0), (9, 9), (0, 9), (0, 0)]])
        assert search.run(RECTANGLE).point == first.point
