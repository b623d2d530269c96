"""Domain models for polelabel.

This module contains the value types the pole search works on. All models
are:

- Immutable (frozen dataclasses)
- Serializable to plain nested lists for inter-process communication
- Independent of any file format

Key classes:
- Coordinate: A finite (x, y) pair
- Ring: A closed loop of coordinates
- Polygon: An outer ring plus optional hole rings
"""

from polelabel.domain.polygon import Coordinate, Polygon, Ring, as_polygon

__all__: list[str] = [
    "Coordinate",
    "Polygon",
    "Ring",
    "as_polygon",
]
