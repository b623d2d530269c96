"""Tests for batch labeling orchestration."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from polelabel.config import PolelabelSettings, ProcessingConfig, SearchConfig
from polelabel.core.processor import LabelProcessor, label_polygon
from polelabel.domain import Coordinate
from polelabel.exceptions import PolygonFormatError, ProcessingCancelledError

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
LAKES_PATH = FIXTURES_DIR / "lakes.geojson"

RECTANGLE = [[[0, 0], [4, 0], [4, 2], [0, 2], [0, 0]]]


@pytest.fixture
def settings() -> PolelabelSettings:
    """In-process settings with a fine precision."""
    return PolelabelSettings(
        search=SearchConfig(precision=0.1),
        processing=ProcessingConfig(max_workers=1),
    )


@pytest.fixture
def mixed_document(tmp_path: Path) -> Path:
    """Feature collection with two valid polygons and one degenerate ring."""
    data = {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "id": "rect", "geometry": {"type": "Polygon", "coordinates": RECTANGLE}},
            {"type": "Feature", "id": "broken", "geometry": {"type": "Polygon", "coordinates": [[[1, 1]]]}},
            {
                "type": "Feature",
                "id": "square",
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[10, 10], [16, 10], [16, 16], [10, 16], [10, 10]]],
                },
            },
        ],
    }
    path = tmp_path / "mixed.geojson"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLabelPolygon:
    """Tests for the picklable worker function."""

    def test_success(self) -> None:
        """Test a successful search result."""
        result = label_polygon(RECTANGLE, SearchConfig(precision=0.5).model_dump(), "r")
        assert "error" not in result
        assert result["label_id"] == "r"
        assert result["point"] == [2.0, 1.0]
        assert result["distance"] == 1.0
        assert result["probes"] > 0
        assert result["duration_ms"] >= 0

    def test_error(self) -> None:
        """Test failures are reported, not raised."""
        result = label_polygon([], SearchConfig().model_dump(), "empty")
        assert result["label_id"] == "empty"
        assert "at least one ring" in result["error"]
        assert "Traceback" in result["traceback"]


class TestLabelProcessor:
    """Tests for LabelProcessor."""

    def test_label_in_document_order(self, settings: PolelabelSettings) -> None:
        """Test labels come back in document order with properties."""
        labels, stats = LabelProcessor(settings).label(LAKES_PATH)

        assert [item.label_id for item in labels] == [
            "long-lake",
            "island-lake",
            "twin-ponds-0",
            "twin-ponds-1",
        ]
        assert labels[0].point == Coordinate(20.0, 5.0)
        assert labels[0].properties == {"name": "Long Lake"}
        assert labels[2].point == Coordinate(202.0, 2.0)
        assert labels[3].point == Coordinate(213.0, 3.0)
        assert stats.processed_count == 4
        assert stats.error_count == 0

    def test_label_avoids_hole(self, settings: PolelabelSettings) -> None:
        """Test the island lake label is outside its island."""
        labels, _ = LabelProcessor(settings).label(LAKES_PATH)
        point = labels[1].point
        assert not (108 <= point.x <= 112 and 8 <= point.y <= 12)

    def test_process_writes_labels(self, settings: PolelabelSettings, tmp_path: Path) -> None:
        """Test the label file is written."""
        output = tmp_path / "labels.geojson"
        stats = LabelProcessor(settings).process(LAKES_PATH, output_path=output)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["features"]) == 4
        assert data["features"][0]["properties"]["precision"] == 0.1
        assert stats.duration_seconds >= 0

    def test_default_output_path(self, settings: PolelabelSettings, tmp_path: Path) -> None:
        """Test the output path defaults to {stem}-labels.geojson."""
        source = tmp_path / "rect.json"
        source.write_text(json.dumps(RECTANGLE), encoding="utf-8")

        LabelProcessor(settings).process(source)

        assert (tmp_path / "rect-labels.geojson").exists()

    def test_skip_invalid(self, settings: PolelabelSettings, mixed_document: Path) -> None:
        """Test malformed polygons are skipped and counted."""
        labels, stats = LabelProcessor(settings).label(mixed_document)
        assert [item.label_id for item in labels] == ["rect", "square"]
        assert stats.skipped_count == 1
        assert labels[1].point == Coordinate(13.0, 13.0)

    def test_skip_flat_ring(self, settings: PolelabelSettings, tmp_path: Path) -> None:
        """Test a ring of bare numbers is skipped instead of aborting the run."""
        data = {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "id": "bad", "geometry": {"type": "Polygon", "coordinates": [[1, 2, 3]]}},
                {"type": "Feature", "id": "scalar", "geometry": {"type": "Polygon", "coordinates": [5]}},
                {"type": "Feature", "id": "ok", "geometry": {"type": "Polygon", "coordinates": RECTANGLE}},
            ],
        }
        path = tmp_path / "flat.geojson"
        path.write_text(json.dumps(data), encoding="utf-8")

        labels, stats = LabelProcessor(settings).label(path)

        assert [item.label_id for item in labels] == ["ok"]
        assert labels[0].point == Coordinate(2.0, 1.0)
        assert stats.skipped_count == 2
        assert stats.error_count == 0

    def test_strict_mode(self, mixed_document: Path) -> None:
        """Test malformed polygons abort the run when skipping is off."""
        settings = PolelabelSettings(
            processing=ProcessingConfig(max_workers=1, skip_invalid=False)
        )
        with pytest.raises(PolygonFormatError, match="broken"):
            LabelProcessor(settings).label(mixed_document)

    def test_progress_callback(self, settings: PolelabelSettings) -> None:
        """Test progress is reported once per polygon."""
        calls: list[tuple[int, int, str, bool]] = []
        LabelProcessor(settings).label(
            LAKES_PATH, progress_callback=lambda *args: calls.append(args)
        )
        assert [c[0] for c in calls] == [1, 2, 3, 4]
        assert all(c[1] == 4 and c[3] for c in calls)

    def test_parallel_matches_sequential(self, settings: PolelabelSettings) -> None:
        """Test worker processes produce the same labels."""
        processor = LabelProcessor(settings)
        sequential, _ = processor.label(LAKES_PATH, max_workers=1)
        parallel, stats = processor.label(LAKES_PATH, max_workers=2)

        assert [(i.label_id, i.point) for i in parallel] == [
            (i.label_id, i.point) for i in sequential
        ]
        assert stats.processed_count == 4

    def test_cancellation(self, settings: PolelabelSettings) -> None:
        """Test Ctrl+C during in-process labeling."""
        with patch("polelabel.core.processor.label_polygon", side_effect=KeyboardInterrupt):
            with pytest.raises(ProcessingCancelledError) as exc_info:
                LabelProcessor(settings).label(LAKES_PATH)
        assert exc_info.value.processed_count == 0
        assert exc_info.value.pending_count == 4

    def test_missing_file(self, settings: PolelabelSettings) -> None:
        """Test a missing document."""
        with pytest.raises(FileNotFoundError):
            LabelProcessor(settings).label(Path("does-not-exist.json"))
