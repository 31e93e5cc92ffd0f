"""Logging utilities for glyphsdf."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    skipped_count: int = 0
    empty_count: int = 0
    error_count: int = 0
    cancelled_count: int = 0
    was_cancelled: bool = False
    errors: list[tuple[str, str]] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        """Average time per processed glyph, None before any glyph finished."""
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)

    @property
    def min_glyph_time_ms(self) -> float | None:
        """Fastest glyph time."""
        return min(self.glyph_timings_ms) if self.glyph_timings_ms else None

    @property
    def max_glyph_time_ms(self) -> float | None:
        """Slowest glyph time."""
        return max(self.glyph_timings_ms) if self.glyph_timings_ms else None


# Marks handlers owned by configure_logging so a later call can replace them
_HANDLER_FLAG = "_glyphsdf_handler"


def _install_handler(root_logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_FLAG, True)
    root_logger.addHandler(handler)


def _remove_installed_handlers(root_logger: logging.Logger) -> None:
    """Detach and close handlers left by an earlier configure_logging call."""
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            root_logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Route structured logs to a log file and, unless quiet, the console.

    Calling it again (one call per processor run) replaces the handlers the
    previous call installed instead of stacking new ones.

    Args:
        log_file: Path to log file (timestamped name in the working
            directory if None)
        console_level: Level name for console output
        file_level: Level name for file output
        quiet: If True, no console handler is installed

    Returns:
        structlog logger named "glyphsdf"
    """
    if log_file is None:
        log_file = Path(f"glyphsdf_{datetime.now():%Y%m%d_%H%M%S}.log")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    _remove_installed_handlers(root_logger)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level.upper())
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )
    _install_handler(root_logger, file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level.upper())
        console_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        _install_handler(root_logger, console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphsdf")
    logger.info("Logging initialized", log_file=str(log_file), file_level=file_level, quiet=quiet)
    return logger


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_glyph_start(self, char: str) -> None:
        """Log submission of a character for processing."""
        self._logger.debug("Processing glyph", char=char, codepoint=f"U+{ord(char):04X}")

    def log_glyph_complete(
        self,
        char: str,
        empty: bool,
        duration_ms: float,
    ) -> None:
        """Log successful glyph processing."""
        self._logger.info(
            "Glyph processed",
            char=char,
            empty=empty,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        if empty:
            self._stats.empty_count += 1
        self._stats.glyph_timings_ms.append(duration_ms)

    def log_glyph_skipped(self, char: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.debug("Glyph skipped", char=char, reason=reason)
        self._stats.skipped_count += 1

    def log_glyph_error(
        self,
        char: str,
        error: str,
        error_type: str,
        traceback: str | None = None,
    ) -> None:
        """Log glyph processing error."""
        self._logger.error(
            "Glyph processing failed",
            char=char,
            error=error,
            error_type=error_type,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((char, error))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
