"""CLI application entry point for glyphsdf.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from glyphsdf import __version__
from glyphsdf.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_font_info,
    print_header,
    print_plan,
    print_processing_info,
    print_selection,
    print_step,
    print_success,
)
from glyphsdf.config import (
    AtlasConfig,
    BoundsStrategy,
    FontConfig,
    GlyphSDFSettings,
    LoggingConfig,
    ProcessingConfig,
    SDFConfig,
)
from glyphsdf.core import GlyphProcessor
from glyphsdf.exceptions import (
    AtlasSaveError,
    FontFormatError,
    FontLoadError,
    GlyphSDFError,
)
from glyphsdf.io import AtlasWriter, FontReader

# Printable ASCII, space included
DEFAULT_CHARACTERS = "".join(chr(cp) for cp in range(32, 127))

app = typer.Typer(
    name="glyphsdf",
    help="Render font glyphs as signed distance fields and pack them into an atlas.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphsdf[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def generate(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Atlas PNG path (default: {name}-sdf.png); the JSON map is written beside it",
        ),
    ] = None,
    chars: Annotated[
        str | None,
        typer.Option(
            "--chars",
            "-c",
            help="Characters to render (default: printable ASCII)",
        ),
    ] = None,
    all_chars: Annotated[
        bool,
        typer.Option(
            "--all-chars",
            help="Render every character the font maps",
        ),
    ] = False,
    font_size: Annotated[
        int,
        typer.Option(
            "--font-size",
            "-s",
            help="Font size in pixels",
            min=1,
            max=512,
        ),
    ] = 24,
    buffer: Annotated[
        int,
        typer.Option(
            "--buffer",
            "-b",
            help="Padding around the glyph in pixels",
            min=0,
            max=128,
        ),
    ] = 3,
    radius: Annotated[
        float,
        typer.Option(
            "--radius",
            "-r",
            help="Distance in pixels mapped across the output range",
            min=0.01,
        ),
    ] = 8.0,
    cutoff: Annotated[
        float,
        typer.Option(
            "--cutoff",
            help="Position of the glyph edge in the output range (0-1)",
            min=0.0,
            max=1.0,
        ),
    ] = 0.25,
    weight: Annotated[
        str,
        typer.Option(
            "--weight",
            help="Named instance of a variable font (e.g. Bold), or 'normal'",
        ),
    ] = "normal",
    bounds: Annotated[
        str,
        typer.Option(
            "--bounds",
            help="Bounding box search for centering (scan|extent)",
        ),
    ] = "extent",
    columns: Annotated[
        int,
        typer.Option(
            "--columns",
            help="Glyph cells per atlas row",
            min=1,
            max=256,
        ),
    ] = 16,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show what would be rendered without writing an atlas",
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
    """Render characters of a font as signed distance fields.

    Each character is rasterized, centered in a square canvas of side
    font-size + 2 * buffer and encoded as an 8-bit SDF. The glyphs are packed
    into a grayscale atlas PNG, with a JSON map giving each character's cell
    and the bounds it was centered with.

    Example:
        glyphsdf Roboto-Regular.ttf --chars "ABC"
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if chars is not None and all_chars:
        print_error("Cannot use --chars and --all-chars together")
        raise typer.Exit(code=1)

    if not input_font.exists():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_font.is_file():
        print_error(
            f"Input path is not a file: {input_font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    try:
        bounds_strategy = BoundsStrategy(bounds.lower())
    except ValueError:
        print_error(
            f"Invalid bounds strategy: {bounds}",
            details="Valid values: scan, extent",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = GlyphSDFSettings(
        sdf=SDFConfig(
            font_size=font_size,
            buffer=buffer,
            radius=radius,
            cutoff=cutoff,
            bounds_strategy=bounds_strategy,
        ),
        font=FontConfig(family=str(input_font), weight=weight),
        atlas=AtlasConfig(columns=columns),
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    try:
        if not quiet:
            print_step("Loading font")

        try:
            with FontReader(input_font) as reader:
                if not quiet:
                    print_font_info(
                        font_path=str(input_font),
                        font_type=reader.format,
                        family=reader.family_name,
                        glyph_count=reader.glyph_count,
                        variable=reader.is_variable,
                    )
                _check_weight(reader, weight)

                requested = reader.characters() if all_chars else _unique(chars or DEFAULT_CHARACTERS)
                selected = [c for c in requested if reader.has_character(c)]
                missing = [c for c in requested if not reader.has_character(c)]
        except GlyphSDFError:
            raise
        except Exception as e:
            raise FontLoadError(str(input_font), str(e)) from e

        if not quiet:
            print_step("Selecting characters")
            print_selection(selected, missing, verbose)

        if not selected:
            if not quiet:
                console.print("\nNo characters to render.")
            raise typer.Exit(code=0)

        if dry_run:
            if not quiet:
                print_plan(
                    glyph_count=len(selected),
                    size=settings.sdf.size,
                    radius=settings.sdf.radius,
                    cutoff=settings.sdf.cutoff,
                    strategy=settings.sdf.bounds_strategy.value,
                    columns=settings.atlas.columns,
                )
            raise typer.Exit(code=0)

        actual_output_path = output if output is not None else AtlasWriter.get_atlas_path(input_font)

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Rendering")
            print_processing_info(
                actual_workers,
                size=settings.sdf.size,
                is_auto=(workers is None),
            )

        processor = GlyphProcessor(settings)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Rendering {len(selected)} glyphs",
                        total=len(selected),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    stats = processor.process(
                        font_path=input_font,
                        characters=selected,
                        output_path=actual_output_path,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process(
                    font_path=input_font,
                    characters=selected,
                    output_path=actual_output_path,
                    max_workers=workers,
                )
        except KeyboardInterrupt:
            if not quiet:
                partial = processor.stats
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=partial.processed_count if partial else 0,
                    cancelled=partial.cancelled_count if partial else 0,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_path=str(actual_output_path),
                file_size=_format_file_size(actual_output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                empty=stats.empty_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_glyph_time_ms,
                min_time_ms=stats.min_glyph_time_ms,
                max_time_ms=stats.max_glyph_time_ms,
            )

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except FontFormatError as e:
        print_error(f"Not a usable font: {e.details}")
        raise typer.Exit(code=1)
    except AtlasSaveError as e:
        print_error(f"Could not save atlas: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphSDFError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _unique(text: str) -> list[str]:
    """Characters of ``text`` in first occurrence order."""
    return list(dict.fromkeys(text))


def _check_weight(reader: FontReader, weight: str) -> None:
    """Validate ``--weight`` against the font before any rendering starts.

    Args:
        reader: Loaded font reader
        weight: Requested weight

    Raises:
        GlyphSDFError: If the weight cannot be selected in this font
    """
    if weight == "normal":
        return
    instances = reader.instance_names()
    if not instances:
        raise GlyphSDFError(f"Weight '{weight}' requires a variable font")
    if weight.lower() not in (name.lower() for name in instances):
        raise GlyphSDFError(
            f"Unknown weight '{weight}'. Available: {', '.join(instances)}"
        )


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
