"""Rich console output helpers for the CLI.

Everything the ``glyphsdf`` command prints goes through the shared
``console`` so tests and ``--quiet`` runs see a single stream.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"

# Missing characters listed with --verbose
MAX_LISTED_MISSING = 20


def create_progress() -> Progress:
    """Create the progress bar shown while glyphs render.

    Returns:
        Progress with a bar, a done/total counter and elapsed time
    """
    return Progress(
        TextColumn("  [progress.description]{task.description}"),
        BarColumn(bar_width=32, complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def _summary_table() -> Table:
    """Borderless two-column table for key/value summaries."""
    table = Table.grid(padding=(0, 3))
    table.add_column(style="dim")
    table.add_column()
    return table


def print_header(version: str) -> None:
    """Print the application banner."""
    console.print(f"\n[bold]glyphsdf[/bold] [dim]v{version}[/dim]")


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(
    font_path: str,
    font_type: str,
    family: str,
    glyph_count: int,
    variable: bool,
) -> None:
    """Print what was found in the input font.

    Args:
        font_path: Path to the font file
        font_type: "TrueType" or "OpenType"
        family: Family name from the name table
        glyph_count: Total number of glyphs in font
        variable: Whether the font has variation axes
    """
    # Text keeps square brackets in paths from being read as markup
    console.print(Text(f"  {font_path}"))
    kind = "variable" if variable else "static"
    console.print(f"  {family} {SYM_DOT} {font_type} {SYM_DOT} {glyph_count:,} glyphs {SYM_DOT} {kind}")


def print_selection(selected: list[str], missing: list[str], verbose: bool) -> None:
    """Print how many requested characters the font can render.

    Args:
        selected: Characters the font maps
        missing: Requested characters the font lacks
        verbose: Whether to list the missing code points
    """
    console.print(f"  [green]{len(selected)}[/green] to render", end="")
    if not missing:
        console.print()
        return

    console.print(f" {SYM_DOT} [yellow]{len(missing)}[/yellow] not in font")
    if verbose:
        listed = " ".join(f"U+{ord(c):04X}" for c in missing[:MAX_LISTED_MISSING])
        hidden = len(missing) - MAX_LISTED_MISSING
        if hidden > 0:
            listed += f" (+{hidden} more)"
        console.print(f"  [dim]{listed}[/dim]")


def print_processing_info(workers: int, size: int, is_auto: bool = False) -> None:
    """Print the cell size and worker count of a run.

    Args:
        workers: Number of parallel workers
        size: SDF canvas side in pixels
        is_auto: Whether the worker count was picked from the CPU count
    """
    source = "auto" if is_auto else "set"
    console.print(
        f"  {size}x{size} px cells {SYM_DOT} {workers} workers ({source}) {SYM_DOT} Ctrl+C to cancel"
    )


def print_plan(
    glyph_count: int,
    size: int,
    radius: float,
    cutoff: float,
    strategy: str,
    columns: int,
) -> None:
    """Print the atlas a dry run would have produced.

    Args:
        glyph_count: Characters that would be rendered
        size: SDF canvas side in pixels
        radius: Distance range of the encoding
        cutoff: Position of the glyph edge in the output range
        strategy: Bounding box search name
        columns: Cells per atlas row
    """
    rows = max(1, -(-glyph_count // columns))

    table = _summary_table()
    table.add_row("characters", str(glyph_count))
    table.add_row("cell", f"{size}x{size} px")
    table.add_row("radius / cutoff", f"{radius} / {cutoff}")
    table.add_row("bounds", strategy)
    table.add_row("atlas (at most)", f"{columns * size}x{rows * size} px")

    console.print()
    console.print(table)
    console.print(f"\n[bold green]{SYM_OK} Dry run complete[/bold green], nothing written")


def _format_duration(seconds: float) -> str:
    """Render a duration as ms, seconds, or minutes and seconds."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    minutes, seconds = divmod(seconds, 60)
    if minutes:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{seconds:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    processed: int,
    empty: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print the summary of a finished run.

    Args:
        output_path: Path to the atlas image
        file_size: Human-readable size of the atlas image
        total_time_s: Wall time of the run in seconds
        processed: Characters rendered, empty ones included
        empty: Characters without coverage (no atlas cell)
        errors: Characters that failed
        avg_time_ms: Mean render time per glyph
        min_time_ms: Fastest glyph
        max_time_ms: Slowest glyph
    """
    console.print(f"\n[bold green]{SYM_OK} Atlas written[/bold green] in {_format_duration(total_time_s)}")

    table = _summary_table()
    table.add_row("image", Text(f"{output_path} ({file_size})", style="bold"))
    table.add_row("cells", str(processed - empty))
    table.add_row("empty", str(empty))
    error_style = "red" if errors else "green"
    table.add_row("errors", Text(str(errors), style=error_style))
    if avg_time_ms is not None:
        timing = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing += f" ({min_time_ms:.1f} to {max_time_ms:.1f}ms)"
        table.add_row("per glyph", timing)
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print an error and optional hint."""
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Acknowledge Ctrl+C while workers wind down."""
    console.print(f"\n{SYM_DOT} Cancelling, waiting for glyphs already rendering")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print what a cancelled run got through.

    Args:
        processed: Glyphs rendered before cancellation
        cancelled: Pending glyphs that were dropped
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]: {processed} rendered, {cancelled} dropped")
    console.print("  No atlas written")
