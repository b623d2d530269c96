"""Polygon I/O layer for polelabel.

This module handles reading polygon documents and writing label results.
It provides a clean abstraction layer between JSON/GeoJSON and the
domain models.

Key responsibilities:
- Load bare JSON polygons and GeoJSON geometries/features
- Convert nested coordinate arrays to domain models
- Write label points as a GeoJSON FeatureCollection

Key classes:
- PolygonReader: Load documents and extract polygons
- LabelWriter: Save label points
"""

from polelabel.io.converter import polygon_from_json, polygon_to_json
from polelabel.io.reader import LabeledPolygon, PolygonReader
from polelabel.io.writer import LabelWriter

__all__ = [
    "LabelWriter",
    "LabeledPolygon",
    "PolygonReader",
    "polygon_from_json",
    "polygon_to_json",
]
