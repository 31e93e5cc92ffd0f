"""Parallel processing orchestration for SDF atlas generation.

This module renders many characters of one font with ProcessPoolExecutor,
one pipeline per worker, and collects the results into an atlas.

Key components:
- process_glyph: Top-level picklable function for parallel execution
- GlyphProcessor: Main orchestrator class for a font's characters
"""

import time
import traceback
from collections.abc import Callable, Iterable
from concurrent.futures import ProcessPoolExecutor, as_completed
from functools import lru_cache
from pathlib import Path
from typing import Any

from glyphsdf.config import FontConfig, GlyphSDFSettings, SDFConfig
from glyphsdf.core.pipeline import GlyphSDFPipeline
from glyphsdf.domain import SDFResult
from glyphsdf.io import AtlasWriter, FontReader
from glyphsdf.utils import ProcessingLogger, ProcessingStats, configure_logging


@lru_cache(maxsize=8)
def _cached_pipeline(
    sdf_items: tuple[tuple[str, Any], ...],
    font_items: tuple[tuple[str, Any], ...],
) -> GlyphSDFPipeline:
    return GlyphSDFPipeline(
        config=SDFConfig(**dict(sdf_items)),
        font=FontConfig(**dict(font_items)),
    )


def worker_pipeline(sdf_dict: dict[str, Any], font_dict: dict[str, Any]) -> GlyphSDFPipeline:
    """Return this process's pipeline for a serialized configuration.

    Pipelines are cached per worker process, so the rasterizer keeps its
    loaded fonts across the characters of a batch.

    Args:
        sdf_dict: Serialized SDF configuration
        font_dict: Serialized font configuration

    Returns:
        Shared GlyphSDFPipeline for that configuration
    """
    return _cached_pipeline(tuple(sorted(sdf_dict.items())), tuple(sorted(font_dict.items())))


def process_glyph(
    char: str,
    sdf_dict: dict[str, Any],
    font_dict: dict[str, Any],
) -> dict[str, Any]:
    """Render a single character to an SDF.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Draws one character with the worker's pipeline for the serialized
    configuration.

    Args:
        char: Character to render
        sdf_dict: Serialized SDF configuration
        font_dict: Serialized font configuration

    Returns:
        Dictionary containing either:
        - Success: {"result": result_dict, "duration_ms": float}
        - Error: {"error": str, "error_type": str, "char": str,
          "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        result = worker_pipeline(sdf_dict, font_dict).draw(char)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "result": result.to_dict(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "char": char,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class GlyphProcessor:
    """Orchestrates parallel SDF generation for a font.

    Manages the complete workflow:
    1. Load font file and select characters it maps
    2. Render characters in parallel using worker processes
    3. Collect results and update statistics
    4. Save the atlas image and JSON map

    Example:
        settings = GlyphSDFSettings()
        processor = GlyphProcessor(settings)
        stats = processor.process(
            font_path=Path("font.ttf"),
            characters="ABC",
            output_path=Path("font-sdf.png"),
        )
    """

    def __init__(self, config: GlyphSDFSettings) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Settings containing SDF, font, atlas and processing config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.stats: ProcessingStats | None = None

    def select_characters(
        self,
        reader: FontReader,
        characters: Iterable[str],
        processing_logger: ProcessingLogger,
    ) -> list[str]:
        """Deduplicate requested characters and drop those the font lacks.

        Args:
            reader: Loaded font reader
            characters: Requested characters, in order
            processing_logger: Logger that records skipped characters

        Returns:
            Characters to render, first occurrence order
        """
        selected: list[str] = []
        seen: set[str] = set()
        for char in characters:
            if char in seen:
                continue
            seen.add(char)

            if self.config.processing.skip_missing and not reader.has_character(char):
                processing_logger.log_glyph_skipped(char, "not mapped by font")
                continue
            selected.append(char)
        return selected

    def process(
        self,
        font_path: Path,
        characters: Iterable[str] | None = None,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Render characters of a font and save them as an atlas.

        Args:
            font_path: Path to input font file (TTF or OTF)
            characters: Characters to render (every mapped character if None)
            output_path: Atlas PNG path (auto-generated if None)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, char, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If font file does not exist
            FontFormatError: If the file is not a readable font
            AtlasSaveError: If the atlas cannot be written
            KeyboardInterrupt: If processing is cancelled by user
        """
        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        stats.start_time = time.time()
        self.stats = stats

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        if output_path is None:
            output_path = AtlasWriter.get_atlas_path(font_path)

        font_config = self.config.font.model_copy(update={"family": str(font_path)})

        self.logger.info(
            "Starting SDF generation",
            input=str(font_path),
            output=str(output_path),
            max_workers=max_workers,
        )

        with FontReader(font_path) as reader:
            self.logger.info(
                "Font loaded",
                family=reader.family_name,
                format=reader.format,
                weight_class=reader.weight_class,
                glyph_count=reader.glyph_count,
                variable=reader.is_variable,
            )
            if characters is None:
                characters = reader.characters()
            chars_to_process = self.select_characters(reader, characters, processing_logger)

        self.logger.info(
            "Selected characters",
            to_process=len(chars_to_process),
            skipped=stats.skipped_count,
        )

        results: dict[str, SDFResult] = {}
        if chars_to_process:
            results = self._process_parallel(
                chars=chars_to_process,
                font_config=font_config,
                max_workers=max_workers,
                processing_logger=processing_logger,
                progress_callback=progress_callback,
            )
        else:
            self.logger.info("No characters to process")

        self._save_atlas(
            results=[results[c] for c in chars_to_process if c in results],
            output_path=output_path,
        )

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            empty=stats.empty_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _process_parallel(
        self,
        chars: list[str],
        font_config: FontConfig,
        max_workers: int | None,
        processing_logger: ProcessingLogger,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, SDFResult]:
        """Render characters in parallel using ProcessPoolExecutor.

        Args:
            chars: Characters to render
            font_config: Font settings pointing at the input font
            max_workers: Maximum worker processes
            processing_logger: Logger that records progress and statistics
            progress_callback: Optional callback(completed, total, char, success)
                for progress updates

        Returns:
            Dictionary mapping characters to their SDF results
        """
        results: dict[str, SDFResult] = {}
        stats = processing_logger.stats

        sdf_dict = self.config.sdf.model_dump()
        font_dict = font_config.model_dump()

        self.logger.info(
            "Starting parallel processing",
            glyph_count=len(chars),
            max_workers=max_workers,
        )

        total = len(chars)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for char in chars:
                processing_logger.log_glyph_start(char)
                future = executor.submit(process_glyph, char, sdf_dict, font_dict)
                pending_futures[future] = char

            try:
                for future in as_completed(pending_futures):
                    char = pending_futures.pop(future)
                    success = False

                    try:
                        outcome = future.result()

                        if "error" in outcome:
                            processing_logger.log_glyph_error(
                                char=outcome["char"],
                                error=outcome["error"],
                                error_type=outcome["error_type"],
                                traceback=outcome.get("traceback"),
                            )
                        else:
                            success = True
                            result = SDFResult.from_dict(outcome["result"])
                            results[char] = result
                            processing_logger.log_glyph_complete(
                                char=char,
                                empty=result.is_empty(),
                                duration_ms=outcome.get("duration_ms", 0.0),
                            )

                    except Exception as e:
                        # Executor-level error
                        processing_logger.log_glyph_error(
                            char=char,
                            error=str(e),
                            error_type=type(e).__name__,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, char, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return results

    def _save_atlas(self, results: list[SDFResult], output_path: Path) -> None:
        """Save rendered glyphs as an atlas.

        Args:
            results: SDF results in atlas order
            output_path: Atlas PNG path
        """
        sdf = self.config.sdf
        writer = AtlasWriter(
            cell_size=sdf.size,
            columns=self.config.atlas.columns,
            metadata={
                "font_size": sdf.font_size,
                "buffer": sdf.buffer,
                "radius": sdf.radius,
                "cutoff": sdf.cutoff,
            },
        )
        for result in results:
            writer.add(result)

        map_path = writer.save(output_path)

        self.logger.info(
            "Atlas saved",
            output=str(output_path),
            map=str(map_path),
            glyphs=writer.glyph_count,
        )
