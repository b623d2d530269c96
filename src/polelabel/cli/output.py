"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from polelabel.core import LabelResult

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for polygon labeling.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Polelabel[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_input_info(input_path: str, polygon_count: int, precision: float, priority: str) -> None:
    """Print input document information.

    Args:
        input_path: Path to the polygon document
        polygon_count: Number of polygons found
        precision: Search precision
        priority: Frontier ordering key
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(input_path)
    console.print(line)
    plural = "polygon" if polygon_count == 1 else "polygons"
    console.print(
        f"  {polygon_count:,} {plural} {SYM_DOT} precision {precision:g} {SYM_DOT} {priority} priority"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int | None) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers (None = auto)
    """
    if workers == 1:
        console.print(f"  in-process {SYM_DOT} Ctrl+C to cancel")
    elif workers is None:
        console.print(f"  auto workers {SYM_DOT} Ctrl+C to cancel")
    else:
        console.print(f"  {workers} workers {SYM_DOT} Ctrl+C to cancel")


def print_labels(labels: list[LabelResult], digits: int | None = None) -> None:
    """Print label points as a table.

    Args:
        labels: Labeled polygons in document order
        digits: Decimal places to show (None = full precision)
    """

    def fmt(value: float) -> str:
        return repr(value) if digits is None else f"{value:.{digits}f}"

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("id")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("distance", justify="right")
    table.add_column("probes", justify="right")

    for item in labels:
        table.add_row(
            item.label_id,
            fmt(item.point.x),
            fmt(item.point.y),
            fmt(item.distance),
            f"{item.probes:,}",
        )

    console.print()
    console.print(table)


def print_success(
    output_path: str | None,
    total_time_s: float,
    processed: int,
    skipped: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file (None when nothing was written)
        total_time_s: Total processing time in seconds
        processed: Number of polygons labeled
        skipped: Number of polygons skipped
        errors: Number of errors encountered
        avg_time_ms: Average search time per polygon in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} labeled {SYM_DOT} {skipped} skipped {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg per polygon")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of polygons labeled before cancellation
        cancelled: Number of pending polygons that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} polygons labeled {SYM_DOT} {cancelled} cancelled")
    console.print("  No output file created")
