"""Polygon reader for loading JSON and GeoJSON documents.

This module provides the PolygonReader class for loading polygon files
and extracting polygons into domain models.
"""

import json
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from polelabel.domain import Polygon
from polelabel.exceptions import PolygonFormatError, PolygonLoadError
from polelabel.io.converter import PolygonRecord, extract_polygon_records, to_polygon


@dataclass(frozen=True)
class LabeledPolygon:
    """A validated polygon with its document identifier."""

    label_id: str
    polygon: Polygon


class PolygonReader:
    """Loads polygon documents and extracts polygons.

    Example:
        reader = PolygonReader(Path("lakes.geojson"))
        reader.load()
        for item in reader.iter_polygons():
            print(item.label_id)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the polygon reader.

        Args:
            path: Path to a JSON or GeoJSON file
        """
        self._path = path
        self._records: list[PolygonRecord] | None = None

    def load(self) -> None:
        """Load and parse the document.

        Raises:
            FileNotFoundError: If the file does not exist
            PolygonLoadError: If the file cannot be read
            PolygonFormatError: If the file is not a recognised polygon document
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Polygon file not found: {self._path}")

        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise PolygonFormatError(str(self._path), f"invalid JSON: {e}") from e
        except OSError as e:
            raise PolygonLoadError(str(self._path), str(e)) from e

        try:
            self._records = extract_polygon_records(data)
        except ValueError as e:
            raise PolygonFormatError(str(self._path), str(e)) from e

    @property
    def path(self) -> Path:
        """Path of the document."""
        return self._path

    @property
    def records(self) -> list[PolygonRecord]:
        """Raw polygon records in document order.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._records is None:
            raise RuntimeError("Polygons not loaded. Call load() first.")
        return self._records

    @property
    def polygon_count(self) -> int:
        """Number of polygons found in the document."""
        return len(self.records)

    def iter_polygons(self) -> Iterator[LabeledPolygon]:
        """Iterate over all polygons, converting to domain models.

        Yields:
            LabeledPolygon for each record, in document order

        Raises:
            RuntimeError: If the document has not been loaded yet
            PolygonError: If a polygon is empty or malformed
        """
        for record in self.records:
            yield LabeledPolygon(record.label_id, to_polygon(record.coordinates))

    def get_polygon(self, index: int = 0) -> Polygon:
        """Get a polygon by position.

        Args:
            index: Position of the polygon in the document

        Returns:
            Polygon domain model

        Raises:
            IndexError: If there is no polygon at that position
        """
        return to_polygon(self.records[index].coordinates)

    def close(self) -> None:
        """Drop the loaded document."""
        self._records = None

    def __enter__(self) -> "PolygonReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
