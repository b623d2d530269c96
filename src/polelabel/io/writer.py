"""Label writer for saving search results.

Labels are written as a GeoJSON FeatureCollection of Point features, one
per labeled polygon, carrying the polygon's identifier, the distance to its
outline and the precision used.
"""

import json
from pathlib import Path
from typing import Any

from polelabel.config import OutputConfig
from polelabel.domain import Coordinate
from polelabel.exceptions import LabelSaveError


class LabelWriter:
    """Collects label points and writes them as GeoJSON.

    Example:
        writer = LabelWriter(Path("lakes-labels.geojson"))
        writer.add("0", Coordinate(3.5, 2.0), distance=1.5, precision=1.0)
        writer.save()
    """

    def __init__(self, output_path: Path, config: OutputConfig | None = None) -> None:
        """Initialize label writer.

        Args:
            output_path: Path where the label file will be written
            config: Output settings (defaults to OutputConfig())
        """
        self._output_path = output_path
        self._config = config if config is not None else OutputConfig()
        self._features: list[dict[str, Any]] = []

    @property
    def output_path(self) -> Path:
        """Path the labels are written to."""
        return self._output_path

    def add(
        self,
        label_id: str,
        point: Coordinate,
        distance: float,
        precision: float,
        properties: dict[str, Any] | None = None,
    ) -> None:
        """Add a label point.

        Args:
            label_id: Identifier of the labeled polygon
            point: Label position
            distance: Signed distance from point to the polygon outline
            precision: Precision the search ran with
            properties: Extra properties copied from the source feature
        """
        round_value = self._config.round_value
        self._features.append(
            {
                "type": "Feature",
                "id": label_id,
                "geometry": {
                    "type": "Point",
                    "coordinates": [round_value(point.x), round_value(point.y)],
                },
                "properties": {
                    **(properties or {}),
                    "distance": round_value(distance),
                    "precision": precision,
                },
            }
        )

    def to_feature_collection(self) -> dict[str, Any]:
        """Build the GeoJSON document for the collected labels."""
        return {"type": "FeatureCollection", "features": list(self._features)}

    def save(self) -> None:
        """Write the label file.

        Raises:
            LabelSaveError: If the file cannot be written
        """
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            with self._output_path.open("w", encoding="utf-8") as f:
                json.dump(self.to_feature_collection(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise LabelSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_labels_path(input_path: Path) -> Path:
        """Generate output path with labels suffix.

        Args:
            input_path: Path to the polygon file

        Returns:
            Path with "-labels.geojson" appended to the stem

        Example:
            >>> LabelWriter.get_labels_path(Path("lakes.json"))
            PosixPath('lakes-labels.geojson')
        """
        return input_path.with_name(f"{input_path.stem}-labels.geojson")
