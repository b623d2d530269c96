"""Exception hierarchy for Polelabel."""


class PolelabelError(Exception):
    """Base exception for all Polelabel errors."""

    pass


class PolygonError(PolelabelError):
    """Errors related to polygon structure."""

    pass


class EmptyPolygonError(PolygonError):
    """Polygon has no rings."""

    def __init__(self) -> None:
        super().__init__("Polygon must have at least one ring")


class DegenerateRingError(PolygonError):
    """Ring has too few coordinates to form an edge."""

    def __init__(self, size: int, ring_index: int | None = None) -> None:
        self.size = size
        self.ring_index = ring_index
        where = f"Ring {ring_index}" if ring_index is not None else "Ring"
        super().__init__(f"{where} needs at least 2 coordinates, got {size}")


class InvalidCoordinateError(PolygonError):
    """Coordinate is not a finite (x, y) pair."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid coordinate: {value!r}")


class SearchError(PolelabelError):
    """Errors in the pole search."""

    pass


class InvalidPrecisionError(SearchError):
    """Precision is not a positive finite number."""

    def __init__(self, precision: object) -> None:
        self.precision = precision
        super().__init__(f"Precision must be a positive finite number, got {precision!r}")


class PolygonIOError(PolelabelError):
    """Errors related to reading polygons or writing labels."""

    pass


class PolygonLoadError(PolygonIOError):
    """Error loading a polygon file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load polygons from '{path}': {reason}")


class PolygonFormatError(PolygonIOError):
    """Unsupported or invalid polygon document."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid polygon format '{path}': {details}")


class LabelSaveError(PolygonIOError):
    """Error saving a label file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save labels to '{path}': {reason}")


class ProcessingCancelledError(PolelabelError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
