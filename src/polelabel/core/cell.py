"""Candidate cells and the search frontier.

A Cell is a square region of the plane evaluated at its center. Its upper
bound is the best signed distance any point inside the square could reach:
the signed distance is 1-Lipschitz, so no point can beat the center by more
than the half-diagonal.
"""

import heapq
import itertools
import math
from dataclasses import dataclass

from polelabel.config import QueuePriority
from polelabel.core.geometry import point_to_polygon_distance
from polelabel.domain import Coordinate, Polygon


@dataclass(frozen=True, slots=True)
class Cell:
    """A square candidate region owned by the search.

    Attributes:
        center: Point being evaluated
        half_size: Half the square's side length
        distance: Signed distance from center to the polygon outline
        upper_bound: Maximum distance any point in the square could achieve
    """

    center: Coordinate
    half_size: float
    distance: float
    upper_bound: float

    @classmethod
    def evaluate(cls, x: float, y: float, half_size: float, polygon: Polygon) -> "Cell":
        """Create a cell centered at (x, y) and measure it against a polygon."""
        distance = point_to_polygon_distance(x, y, polygon)
        return cls(
            center=Coordinate(x, y),
            half_size=half_size,
            distance=distance,
            upper_bound=distance + half_size * math.sqrt(2),
        )

    def split(self, polygon: Polygon) -> list["Cell"]:
        """Subdivide into four evaluated quadrant cells.

        Returns:
            Children in order: lower-left, lower-right, upper-left, upper-right
        """
        h = self.half_size / 2
        x, y = self.center.x, self.center.y
        return [
            Cell.evaluate(x - h, y - h, h, polygon),
            Cell.evaluate(x + h, y - h, h, polygon),
            Cell.evaluate(x - h, y + h, h, polygon),
            Cell.evaluate(x + h, y + h, h, polygon),
        ]


class CellQueue:
    """Max-priority queue of unexpanded cells.

    Backed by a binary heap with negated keys. Ties pop in insertion order,
    so a search over the same input always visits cells in the same order.

    Example:
        queue = CellQueue(QueuePriority.DISTANCE)
        queue.push(cell)
        best = queue.pop()
    """

    def __init__(self, priority: QueuePriority = QueuePriority.DISTANCE) -> None:
        self._priority = priority
        self._heap: list[tuple[float, int, Cell]] = []
        self._counter = itertools.count()

    @property
    def priority(self) -> QueuePriority:
        """Key the queue orders cells by."""
        return self._priority

    def key(self, cell: Cell) -> float:
        """Priority value of a cell; larger pops first."""
        if self._priority == QueuePriority.UPPER_BOUND:
            return cell.upper_bound
        return cell.distance

    def push(self, cell: Cell) -> None:
        """Add a cell to the frontier."""
        heapq.heappush(self._heap, (-self.key(cell), next(self._counter), cell))

    def pop(self) -> Cell:
        """Remove and return the highest-priority cell.

        Raises:
            IndexError: If the queue is empty
        """
        if not self._heap:
            raise IndexError("pop from empty CellQueue")
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)
