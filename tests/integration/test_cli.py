"""End-to-end tests for the command-line interface."""

import json
import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from polelabel import __version__
from polelabel.cli import app

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

runner = CliRunner()


@pytest.fixture
def lakes(tmp_path: Path) -> Path:
    """Copy of the lakes fixture in a scratch directory."""
    path = tmp_path / "lakes.geojson"
    shutil.copy(FIXTURES_DIR / "lakes.geojson", path)
    return path


def test_version() -> None:
    """Test --version prints the version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_writes_default_output(lakes: Path) -> None:
    """Test labeling writes {stem}-labels.geojson."""
    result = runner.invoke(app, [str(lakes), "--workers", "1", "--quiet"])

    assert result.exit_code == 0, result.output
    data = json.loads((lakes.parent / "lakes-labels.geojson").read_text(encoding="utf-8"))
    assert [f["id"] for f in data["features"]][:2] == ["long-lake", "island-lake"]
    assert data["features"][0]["geometry"]["coordinates"] == [20.0, 5.0]


def test_explicit_output_and_digits(lakes: Path, tmp_path: Path) -> None:
    """Test --output, --precision and --digits."""
    output = tmp_path / "out.geojson"
    result = runner.invoke(
        app,
        [str(lakes), "-o", str(output), "-p", "0.5", "-d", "1", "-j", "1", "--priority", "upper_bound"],
    )

    assert result.exit_code == 0, result.output
    assert "Complete" in result.output
    features = json.loads(output.read_text(encoding="utf-8"))["features"]
    assert all(f["properties"]["precision"] == 0.5 for f in features)


def test_print_only(lakes: Path) -> None:
    """Test --print shows labels without writing a file."""
    result = runner.invoke(app, [str(lakes), "--print", "-j", "1", "-q"])

    assert result.exit_code == 0, result.output
    assert "long-lake" in result.output
    assert not (lakes.parent / "lakes-labels.geojson").exists()


def test_bare_polygon(tmp_path: Path) -> None:
    """Test a bare JSON polygon file."""
    path = tmp_path / "rect.json"
    path.write_text(json.dumps([[[0, 0], [4, 0], [4, 2], [0, 2], [0, 0]]]), encoding="utf-8")

    result = runner.invoke(app, [str(path), "-q"])

    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "rect-labels.geojson").read_text(encoding="utf-8"))
    assert data["features"][0]["geometry"]["coordinates"] == [2.0, 1.0]


def test_missing_input(tmp_path: Path) -> None:
    """Test a missing input file."""
    result = runner.invoke(app, [str(tmp_path / "nope.json")])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_invalid_priority(lakes: Path) -> None:
    """Test an unknown priority key."""
    result = runner.invoke(app, [str(lakes), "--priority", "random"])
    assert result.exit_code == 1
    assert "Invalid priority" in result.output


def test_invalid_precision(lakes: Path) -> None:
    """Test a non-positive precision."""
    result = runner.invoke(app, [str(lakes), "--precision", "0"])
    assert result.exit_code == 1
    assert "Precision must be" in result.output


def test_verbose_and_quiet(lakes: Path) -> None:
    """Test mutually exclusive output modes."""
    result = runner.invoke(app, [str(lakes), "-v", "-q"])
    assert result.exit_code == 1


def test_invalid_document(tmp_path: Path) -> None:
    """Test an unrecognised JSON document."""
    path = tmp_path / "point.json"
    path.write_text(json.dumps({"type": "Point", "coordinates": [0, 0]}), encoding="utf-8")

    result = runner.invoke(app, [str(path), "-q"])

    assert result.exit_code == 1
    assert "Invalid polygon file" in result.output


def test_invalid_log_level(lakes: Path) -> None:
    """Test an unknown logging level is reported, not raised."""
    result = runner.invoke(app, [str(lakes), "--log-level", "chatty"])
    assert result.exit_code == 1
    assert "Invalid log level" in result.output


def test_log_level_case_insensitive(lakes: Path, tmp_path: Path) -> None:
    """Test lowercase level names are accepted."""
    log_file = tmp_path / "run.log"
    result = runner.invoke(
        app, [str(lakes), "-q", "-j", "1", "--log-level", "info", "--log-file", str(log_file)]
    )
    assert result.exit_code == 0, result.output
    assert log_file.exists()
