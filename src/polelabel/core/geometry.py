"""Geometric primitives for the pole of inaccessibility search.

This module provides the mathematical building blocks the search calls
once per candidate cell:
- Bounding box of the outer ring
- Squared point-to-segment distance (clamped projection)
- Signed point-to-polygon distance (positive inside, negative outside)
- Point-in-polygon testing (even-odd ray casting across all rings)
- Area-weighted centroid of the outer ring

All functions are pure and stateless. Polygons are expected to have
explicitly closed rings; no edge from the last coordinate back to the
first is added.
"""

import math

from polelabel.domain import Coordinate, Polygon


def bounding_box(polygon: Polygon) -> tuple[float, float, float, float]:
    """Calculate the bounding box of a polygon's outer ring.

    Hole rings are ignored, since they lie inside the outer ring.

    Args:
        polygon: Polygon to measure

    Returns:
        Tuple of (min_x, min_y, max_x, max_y). Zero width or height when the
        outer ring is degenerate.

    Examples:
        >>> square = Polygon.from_coordinates([[(0, 0), (4, 0), (4, 2), (0, 0)]])
        >>> bounding_box(square)
        (0.0, 0.0, 4.0, 2.0)
    """
    return polygon.outer.bounding_box()


def segment_distance_squared(px: float, py: float, a: Coordinate, b: Coordinate) -> float:
    """Squared distance from a point to a line segment.

    Projects the point onto the infinite line through the segment, clamps the
    projection parameter to [0, 1] and measures to the resulting point. A
    zero-length segment measures to its single point.

    Args:
        px: X coordinate of the point
        py: Y coordinate of the point
        a: Segment start
        b: Segment end

    Returns:
        Squared Euclidean distance

    Examples:
        >>> segment_distance_squared(1.0, 1.0, Coordinate(0.0, 0.0), Coordinate(2.0, 0.0))
        1.0
        >>> segment_distance_squared(3.0, 0.0, Coordinate(0.0, 0.0), Coordinate(2.0, 0.0))
        1.0
    """
    x = a.x
    y = a.y
    dx = b.x - x
    dy = b.y - y

    if dx != 0 or dy != 0:
        t = ((px - x) * dx + (py - y) * dy) / (dx * dx + dy * dy)
        if t > 1:
            x = b.x
            y = b.y
        elif t > 0:
            x += dx * t
            y += dy * t

    dx = px - x
    dy = py - y

    return dx * dx + dy * dy


def _crosses_ray(x: float, y: float, a: Coordinate, b: Coordinate) -> bool:
    # Horizontal ray to the right of (x, y); b.y != a.y whenever the first test holds
    return ((a.y > y) != (b.y > y)) and (x < (b.x - a.x) * (y - a.y) / (b.y - a.y) + a.x)


def point_to_polygon_distance(x: float, y: float, polygon: Polygon) -> float:
    """Signed distance from a point to the polygon outline.

    Walks every edge of every ring once, tracking both the minimum squared
    distance and a single even-odd crossing flag shared by all rings, so
    holes flip the inside state without a separate subtraction step.

    Args:
        x: X coordinate of the point
        y: Y coordinate of the point
        polygon: Polygon to measure against

    Returns:
        Distance to the nearest edge, positive if the point is inside the
        polygon and negative otherwise

    Examples:
        >>> square = Polygon.from_coordinates([[(0, 0), (4, 0), (4, 4), (0, 4), (0, 0)]])
        >>> point_to_polygon_distance(2.0, 1.0, square)
        1.0
        >>> point_to_polygon_distance(6.0, 2.0, square)
        -2.0
    """
    inside = False
    min_dist_sq = math.inf

    for ring in polygon.rings:
        for a, b in ring.edges():
            if _crosses_ray(x, y, a, b):
                inside = not inside
            dist_sq = segment_distance_squared(x, y, a, b)
            if dist_sq < min_dist_sq:
                min_dist_sq = dist_sq

    distance = math.sqrt(min_dist_sq)
    return distance if inside else -distance


def point_in_polygon(x: float, y: float, polygon: Polygon) -> bool:
    """Determine if a point is inside a polygon using ray casting.

    Casts a horizontal ray from the point to the right and counts crossings
    with the edges of all rings combined. Odd count = inside, even = outside,
    so a point inside a hole is reported as outside.

    Args:
        x: X coordinate of the point to test
        y: Y coordinate of the point to test
        polygon: Polygon to test against

    Returns:
        True if point is inside polygon, False otherwise
    """
    inside = False
    for ring in polygon.rings:
        for a, b in ring.edges():
            if _crosses_ray(x, y, a, b):
                inside = not inside
    return inside


def polygon_centroid(polygon: Polygon) -> tuple[Coordinate, float]:
    """Calculate the area-weighted centroid of the outer ring.

    For a ring with zero signed area (collinear or self-cancelling) the
    first vertex is returned with zero weight.

    Args:
        polygon: Polygon whose outer ring is used

    Returns:
        Tuple of (centroid, signed_area). The area is positive for
        counter-clockwise rings.

    Examples:
        >>> square = Polygon.from_coordinates([[(0, 0), (2, 0), (2, 2), (0, 2), (0, 0)]])
        >>> polygon_centroid(square)
        (Coordinate(x=1.0, y=1.0), 4.0)
    """
    ring = polygon.outer
    area = 0.0
    x = 0.0
    y = 0.0

    for a, b in ring.edges():
        f = a.x * b.y - b.x * a.y
        x += (a.x + b.x) * f
        y += (a.y + b.y) * f
        area += f * 3

    if area == 0:
        return ring[0], 0.0

    return Coordinate(x / area, y / area), area / 6
