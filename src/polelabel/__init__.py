"""Polelabel - Find the pole of inaccessibility of a polygon.

Polelabel computes the point inside a polygon (optionally with holes) that is
farthest from any edge, to a caller-specified precision. It is used to place
a single label or marker inside an irregular shape so that it stays clear of
the outline.

Example:
    >>> from polelabel import find_best_point
    >>> find_best_point([[(0, 0), (4, 0), (4, 2), (0, 2), (0, 0)]], precision=1.0)
    Coordinate(x=2.0, y=1.0)

The command-line tool labels every polygon of a JSON or GeoJSON file:
    $ polelabel lakes.geojson --precision 0.5
"""

__version__ = "0.1.0"

from polelabel.core.search import PoleSearch, SearchResult, find_best_point, find_pole
from polelabel.domain import Coordinate, Polygon, Ring

__all__ = [
    "Coordinate",
    "PoleSearch",
    "Polygon",
    "Ring",
    "SearchResult",
    "__version__",
    "find_best_point",
    "find_pole",
]
