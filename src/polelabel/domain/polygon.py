"""Core geometric types for polygon representation.

This module defines the value types the pole search operates on:
- Coordinate: An immutable (x, y) pair
- Ring: A closed loop of coordinates (first coordinate repeated as last)
- Polygon: An outer ring followed by zero or more hole rings

Rings are explicitly closed: the edge from the last coordinate back to the
first is NOT implied. Inside/outside is decided with the even-odd rule over
all rings together, so holes need no special treatment.
"""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from itertools import pairwise
from typing import Any

from polelabel.exceptions import DegenerateRingError, EmptyPolygonError, InvalidCoordinateError


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_list(self) -> list[float]:
        """Convert to a JSON-friendly [x, y] list."""
        return [self.x, self.y]

    @classmethod
    def from_sequence(cls, value: Sequence[Any]) -> "Coordinate":
        """Build a coordinate from an [x, y] pair.

        Extra elements (e.g. a GeoJSON altitude) are ignored.

        Args:
            value: Sequence whose first two items are numbers

        Returns:
            Coordinate instance

        Raises:
            InvalidCoordinateError: If the value is not a finite pair
        """
        if not isinstance(value, Sequence) or isinstance(value, (str, bytes)) or len(value) < 2:
            raise InvalidCoordinateError(value)

        try:
            x = float(value[0])
            y = float(value[1])
        except (TypeError, ValueError) as e:
            raise InvalidCoordinateError(value) from e

        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidCoordinateError(value)

        return cls(x, y)


@dataclass(frozen=True, slots=True)
class Ring:
    """A closed loop of coordinates.

    By convention the first and last coordinates are equal. Edges are the
    consecutive coordinate pairs, so a closed ring of n coordinates has
    n - 1 edges.

    Attributes:
        coordinates: Coordinates forming the ring
    """

    coordinates: tuple[Coordinate, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.coordinates, tuple):
            object.__setattr__(self, "coordinates", tuple(self.coordinates))
        if len(self.coordinates) < 2:
            raise DegenerateRingError(len(self.coordinates))

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.coordinates)

    def __getitem__(self, index: int) -> Coordinate:
        return self.coordinates[index]

    def edges(self) -> Iterator[tuple[Coordinate, Coordinate]]:
        """Yield each edge as a (start, end) pair of consecutive coordinates."""
        return pairwise(self.coordinates)

    @property
    def is_closed(self) -> bool:
        """Whether the last coordinate repeats the first."""
        return self.coordinates[0] == self.coordinates[-1]

    def closed(self) -> "Ring":
        """Return this ring with explicit closure.

        Returns:
            Self if already closed, otherwise a new ring with the first
            coordinate appended
        """
        if self.is_closed:
            return self
        return Ring(self.coordinates + (self.coordinates[0],))

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the ring.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        xs = [c.x for c in self.coordinates]
        ys = [c.y for c in self.coordinates]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_list(self) -> list[list[float]]:
        """Serialize to a list of [x, y] pairs."""
        return [c.to_list() for c in self.coordinates]

    @classmethod
    def from_sequence(cls, data: Sequence[Sequence[Any]], ring_index: int | None = None) -> "Ring":
        """Deserialize from a sequence of [x, y] pairs.

        Args:
            data: Sequence of coordinate pairs
            ring_index: Position of the ring in its polygon, for error messages

        Returns:
            Ring instance

        Raises:
            DegenerateRingError: If fewer than 2 coordinates are given
            InvalidCoordinateError: If data is not a sequence or any
                coordinate is not a finite pair
        """
        if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
            raise InvalidCoordinateError(data)
        if len(data) < 2:
            raise DegenerateRingError(len(data), ring_index)
        return cls(tuple(Coordinate.from_sequence(c) for c in data))


@dataclass(frozen=True, slots=True)
class Polygon:
    """A polygon with optional holes.

    Ring 0 is the outer boundary; any further rings are holes. Winding
    direction and self-intersection are not checked.

    Attributes:
        rings: Rings forming the polygon
    """

    rings: tuple[Ring, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.rings, tuple):
            object.__setattr__(self, "rings", tuple(self.rings))
        if not self.rings:
            raise EmptyPolygonError()

    def __len__(self) -> int:
        return len(self.rings)

    def __iter__(self) -> Iterator[Ring]:
        return iter(self.rings)

    @property
    def outer(self) -> Ring:
        """The outer boundary ring."""
        return self.rings[0]

    @property
    def holes(self) -> tuple[Ring, ...]:
        """Hole rings (everything after the outer ring)."""
        return self.rings[1:]

    def to_list(self) -> list[list[list[float]]]:
        """Serialize to nested lists (one list of [x, y] pairs per ring)."""
        return [ring.to_list() for ring in self.rings]

    @classmethod
    def from_coordinates(cls, data: Sequence[Sequence[Sequence[Any]]]) -> "Polygon":
        """Build a polygon from nested [x, y] sequences.

        Args:
            data: One sequence of coordinate pairs per ring, outer ring first

        Returns:
            Polygon instance

        Raises:
            EmptyPolygonError: If no rings are given
            DegenerateRingError: If a ring has fewer than 2 coordinates
            InvalidCoordinateError: If a coordinate is not a finite pair
        """
        if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
            raise InvalidCoordinateError(data)
        if not data:
            raise EmptyPolygonError()
        return cls(tuple(Ring.from_sequence(ring, i) for i, ring in enumerate(data)))


def as_polygon(value: "Polygon | Sequence[Sequence[Sequence[Any]]]") -> Polygon:
    """Coerce raw nested coordinates into a Polygon.

    Args:
        value: A Polygon, or nested sequences of [x, y] pairs

    Returns:
        The Polygon unchanged, or a new one built from the sequences
    """
    if isinstance(value, Polygon):
        return value
    return Polygon.from_coordinates(value)
