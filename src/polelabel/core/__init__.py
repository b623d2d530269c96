"""Core algorithms for polelabel.

This module contains the core algorithms for:

- Geometry primitives (bounding box, signed distance, point-in-polygon, centroid)
- Candidate cells and the priority-ordered search frontier
- Branch-and-bound search for the pole of inaccessibility
- Batch labeling of polygon documents

Key functions:
- bounding_box: Bounding box of the outer ring
- segment_distance_squared: Squared distance from a point to a segment
- point_to_polygon_distance: Signed distance to the polygon outline
- point_in_polygon: Even-odd containment test across all rings
- polygon_centroid: Area-weighted centroid of the outer ring
- find_best_point: Best label point for a polygon
- find_pole: Best point with its distance and search statistics

Key classes:
- Cell: Evaluated square candidate region
- CellQueue: Max-priority frontier of unexpanded cells
- PoleSearch: Configured search runner
- LabelProcessor: Labels every polygon in a document
"""

from polelabel.core.cell import Cell, CellQueue
from polelabel.core.geometry import (
    bounding_box,
    point_in_polygon,
    point_to_polygon_distance,
    polygon_centroid,
    segment_distance_squared,
)
from polelabel.core.processor import LabelProcessor, LabelResult, label_polygon
from polelabel.core.search import (
    PoleSearch,
    SearchResult,
    SearchStats,
    find_best_point,
    find_pole,
    validate_precision,
)

__all__ = [
    # Search classes
    "Cell",
    "CellQueue",
    "LabelProcessor",
    "LabelResult",
    "PoleSearch",
    "SearchResult",
    "SearchStats",
    # Geometry functions
    "bounding_box",
    "find_best_point",
    "find_pole",
    "label_polygon",
    "point_in_polygon",
    "point_to_polygon_distance",
    "polygon_centroid",
    "segment_distance_squared",
    "validate_precision",
]
