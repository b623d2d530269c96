"""Conversion between JSON documents and domain polygons.

Supported documents:
- Bare polygon: ``[[[x, y], ...], ...]`` with one array per ring
- A list of bare polygons
- GeoJSON ``Polygon``, ``MultiPolygon``, ``Feature`` and ``FeatureCollection``

Features whose geometry is not polygonal are ignored.
"""

import logging
from dataclasses import dataclass, field
from numbers import Real
from typing import Any

from polelabel.domain import Polygon, Ring

logger = logging.getLogger(__name__)

POLYGONAL_TYPES = ("Polygon", "MultiPolygon")


@dataclass(frozen=True)
class PolygonRecord:
    """A polygon as found in a document, before validation.

    Attributes:
        label_id: Identifier used in logs and written labels
        coordinates: Raw nested [x, y] lists, outer ring first
        properties: Feature properties carried through to the output
    """

    label_id: str
    coordinates: list[Any]
    properties: dict[str, Any] = field(default_factory=dict)


def _nesting_depth(data: Any) -> int:
    """Count list levels above the first number (a bare polygon is 3)."""
    depth = 0
    while isinstance(data, (list, tuple)):
        if not data:
            return depth + 1
        depth += 1
        data = data[0]
    return depth if isinstance(data, Real) else -1


def _geometry_records(
    geometry: dict[str, Any], base_id: str, properties: dict[str, Any]
) -> list[PolygonRecord]:
    geometry_type = geometry.get("type")
    coordinates = geometry.get("coordinates")

    if not isinstance(coordinates, list):
        raise ValueError(f"{geometry_type} geometry '{base_id}' has no coordinates array")

    if geometry_type == "Polygon":
        return [PolygonRecord(base_id, coordinates, properties)]

    return [
        PolygonRecord(f"{base_id}-{i}", polygon, properties)
        for i, polygon in enumerate(coordinates)
    ]


def _feature_records(feature: dict[str, Any], index: int) -> list[PolygonRecord]:
    # "#" keeps positional names apart from explicit ids
    feature_id = feature.get("id")
    base_id = f"#{index}" if feature_id is None else str(feature_id)
    geometry = feature.get("geometry")
    properties = feature.get("properties") or {}

    if not isinstance(geometry, dict) or geometry.get("type") not in POLYGONAL_TYPES:
        logger.debug("Ignoring feature without polygonal geometry: %s", base_id)
        return []

    return _geometry_records(geometry, base_id, properties)


def extract_polygon_records(data: Any) -> list[PolygonRecord]:
    """Find every polygon in a parsed JSON document.

    Args:
        data: Result of json.load on a polygon document

    Returns:
        Records in document order

    Raises:
        ValueError: If the document shape is not recognised
    """
    if isinstance(data, list):
        depth = _nesting_depth(data)
        if depth == 3:
            return [PolygonRecord("0", data)]
        if depth == 4:
            return [PolygonRecord(str(i), polygon) for i, polygon in enumerate(data)]
        raise ValueError(
            "Expected a polygon (array of rings of [x, y] pairs) or an array of polygons"
        )

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON array or object, got {type(data).__name__}")

    doc_type = data.get("type")

    if doc_type == "Polygon":
        return _geometry_records(data, "0", {})

    if doc_type == "MultiPolygon":
        return [
            PolygonRecord(str(i), polygon)
            for i, polygon in enumerate(data.get("coordinates") or [])
        ]

    if doc_type == "Feature":
        return _feature_records(data, 0)

    if doc_type == "FeatureCollection":
        records: list[PolygonRecord] = []
        for index, feature in enumerate(data.get("features") or []):
            if isinstance(feature, dict):
                records.extend(_feature_records(feature, index))
        return records

    raise ValueError(f"Unsupported GeoJSON type: {doc_type!r}")


def to_polygon(coordinates: Any, close_rings: bool = True) -> Polygon:
    """Build a Polygon from raw nested coordinates.

    Args:
        coordinates: One array of [x, y] pairs per ring, outer ring first
        close_rings: Append the first coordinate to rings that do not repeat it

    Returns:
        Polygon instance

    Raises:
        PolygonError: If the polygon is empty, has a ring with fewer than
            2 coordinates, or has a non-finite coordinate
    """
    polygon = Polygon.from_coordinates(coordinates)
    if not close_rings:
        return polygon

    open_rings = [i for i, ring in enumerate(polygon.rings) if not ring.is_closed]
    if not open_rings:
        return polygon

    logger.warning("Closing open rings %s", open_rings)
    rings: list[Ring] = [ring.closed() for ring in polygon.rings]
    return Polygon(tuple(rings))


def polygon_from_json(data: Any) -> Polygon:
    """Decode a single polygon document.

    Args:
        data: Bare polygon array, or a GeoJSON Polygon or Feature

    Returns:
        Polygon instance

    Raises:
        ValueError: If the document does not hold exactly one polygon
    """
    records = extract_polygon_records(data)
    if len(records) != 1:
        raise ValueError(f"Expected exactly one polygon, found {len(records)}")
    return to_polygon(records[0].coordinates)


def polygon_to_json(polygon: Polygon) -> list[list[list[float]]]:
    """Encode a polygon as nested [x, y] arrays."""
    return polygon.to_list()
