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

from penroute.domain import Polygon

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"


def create_progress() -> Progress:
    """Create a rich progress bar for cell processing."""
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    console.print(f"\n[bold]Penroute[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    console.print(f"\n{SYM_STEP} {message}")


def print_run_info(seed: float, mode: str, width: float, height: float) -> None:
    """Print the run parameters.

    Args:
        seed: Seed used for sampling
        mode: Point ordering inside cells
        width: Page width in mm
        height: Page height in mm
    """
    console.print(f"  seed {seed:g} {SYM_DOT} {mode} ordering {SYM_DOT} {width:g}x{height:g} mm")


def print_partition(sites: int, cells: int, kept: int) -> None:
    console.print(
        f"  [green]{kept}[/green] cells kept {SYM_DOT} {cells} cells {SYM_DOT} {sites} sites"
    )


def print_cell_table(polygons: list[Polygon], limit: int = 20) -> None:
    """Print a table of kept cells.

    Args:
        polygons: Kept cells in normalized coordinates
        limit: Maximum rows shown
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("cell", justify="right")
    table.add_column("vertices", justify="right")
    table.add_column("area", justify="right")
    table.add_column("edge", justify="right")

    for index, poly in enumerate(polygons[:limit]):
        table.add_row(
            str(index),
            str(len(poly.points)),
            f"{poly.area():.4f}",
            f"{poly.bounding_square_edge():.3f}",
        )
    console.print(table)
    if len(polygons) > limit:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(polygons) - limit} more)")


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


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_success(
    total_time_s: float,
    processed: int,
    routes: int,
    strokes: int,
    points: int,
    errors: int,
    output_path: str | None = None,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        total_time_s: Total processing time in seconds
        processed: Number of cells processed
        routes: Number of drawable routes
        strokes: Number of strokes after pen-lift splitting
        points: Total points sampled
        errors: Number of errors encountered
        output_path: Path of the written routes file, if any
        avg_time_ms: Average processing time per cell in milliseconds
        min_time_ms: Minimum processing time per cell in milliseconds
        max_time_ms: Maximum processing time per cell in milliseconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")

    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} cells {SYM_DOT} {routes} routes {SYM_DOT} {strokes} strokes "
        f"{SYM_DOT} {points} points {SYM_DOT} [{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}-{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress cells")


def print_cancellation_summary() -> None:
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print("  Pending cells were cancelled")
    console.print("  No routes written")
