"""CLI application entry point for polelabel.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from polelabel import __version__
from polelabel.cli.output import (
    console,
    create_progress,
    print_cancellation_summary,
    print_error,
    print_header,
    print_input_info,
    print_labels,
    print_processing_info,
    print_step,
    print_success,
)
from polelabel.config import (
    LOG_LEVELS,
    LoggingConfig,
    OutputConfig,
    PolelabelSettings,
    ProcessingConfig,
    QueuePriority,
    SearchConfig,
)
from polelabel.core import LabelProcessor, validate_precision
from polelabel.core.processor import ProgressCallback
from polelabel.exceptions import (
    InvalidPrecisionError,
    LabelSaveError,
    PolelabelError,
    PolygonFormatError,
    PolygonLoadError,
    ProcessingCancelledError,
)
from polelabel.io import LabelWriter, PolygonReader
from polelabel.utils import LabelingStats

app = typer.Typer(
    name="polelabel",
    help="Find the point inside each polygon farthest from its outline.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Polelabel[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def label(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON polygon (array of rings) or GeoJSON file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-labels.geojson)",
        ),
    ] = None,
    precision: Annotated[
        float,
        typer.Option(
            "--precision",
            "-p",
            help="Maximum shortfall from the true best distance (> 0)",
        ),
    ] = 1.0,
    priority: Annotated[
        str,
        typer.Option(
            "--priority",
            help="Frontier ordering (distance|upper_bound)",
        ),
    ] = "distance",
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1 = in-process)",
            min=1,
        ),
    ] = None,
    digits: Annotated[
        int | None,
        typer.Option(
            "--digits",
            "-d",
            help="Round output coordinates to this many decimals",
            min=0,
            max=15,
        ),
    ] = None,
    print_only: Annotated[
        bool,
        typer.Option(
            "--print",
            help="Print labels to the console instead of writing a file",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Label every polygon in a file with its pole of inaccessibility.

    The label point is the point inside the polygon farthest from any edge,
    found to within --precision. Holes are honored.

    Example:
        polelabel lakes.geojson --precision 0.5

    This will create lakes-labels.geojson with one Point feature per polygon.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_file.exists():
        print_error(
            f"Input file not found: {input_file}",
            details=f"The file '{input_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_file.is_file():
        print_error(
            f"Input path is not a file: {input_file}",
            details="Please provide a path to a JSON or GeoJSON polygon file.",
        )
        raise typer.Exit(code=1)

    try:
        priority_key = QueuePriority(priority.lower())
    except ValueError:
        print_error(
            f"Invalid priority: {priority}",
            details="Valid values: distance, upper_bound",
        )
        raise typer.Exit(code=1)

    log_level = log_level.upper()
    if log_level not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    try:
        precision = validate_precision(precision)
    except InvalidPrecisionError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = PolelabelSettings(
        search=SearchConfig(precision=precision, priority=priority_key),
        processing=ProcessingConfig(max_workers=workers),
        output=OutputConfig(coordinate_digits=digits),
        logging=LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else log_level,
        ),
    )

    output_path = None if print_only else output or LabelWriter.get_labels_path(input_file)

    try:
        if not quiet:
            print_step("Loading polygons")
            with PolygonReader(input_file) as reader:
                polygon_count = reader.polygon_count
            print_input_info(
                input_path=str(input_file),
                polygon_count=polygon_count,
                precision=precision,
                priority=priority_key.value,
            )
            print_step("Labeling")
            print_processing_info(workers)

        processor = LabelProcessor(settings)

        def run(progress_callback: ProgressCallback | None = None) -> LabelingStats:
            if print_only:
                labels, stats = processor.label(
                    input_file, max_workers=workers, progress_callback=progress_callback
                )
                print_labels(labels, digits)
                return stats
            return processor.process(
                input_file,
                output_path=output_path,
                max_workers=workers,
                progress_callback=progress_callback,
            )

        if quiet:
            stats = run()
        else:
            with create_progress() as progress:
                task_id = progress.add_task("Labeling", total=None)

                def update_progress(completed: int, total: int, *_: object) -> None:
                    progress.update(task_id, completed=completed, total=total)

                stats = run(update_progress)

        if not quiet:
            print_success(
                output_path=str(output_path) if output_path is not None else None,
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                skipped=stats.skipped_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_polygon_time_ms,
            )

    except PolygonLoadError as e:
        print_error(f"Could not load polygons: {e.reason}")
        raise typer.Exit(code=1)
    except PolygonFormatError as e:
        print_error(f"Invalid polygon file: {e.details}")
        raise typer.Exit(code=1)
    except LabelSaveError as e:
        print_error(f"Could not save labels: {e.reason}")
        raise typer.Exit(code=1)
    except ProcessingCancelledError as e:
        if not quiet:
            print_cancellation_summary(e.processed_count, e.pending_count)
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except PolelabelError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
