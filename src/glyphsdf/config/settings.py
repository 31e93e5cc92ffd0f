"""Configuration settings for glyphsdf."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class BoundsStrategy(str, Enum):
    """How the glyph bounding box is located before centering."""

    SCAN = "scan"
    EXTENT = "extent"


class SDFConfig(BaseModel):
    """Configuration for signed distance field generation.

    The canvas is square with side ``font_size + 2 * buffer``; the buffer holds
    the distance falloff and antialiasing around the glyph.
    """

    font_size: int = Field(
        default=24,
        ge=1,
        le=512,
        description="Font size in pixels",
    )
    buffer: int = Field(
        default=3,
        ge=0,
        le=128,
        description="Padding added to the canvas on all sides",
    )
    radius: float = Field(
        default=8.0,
        gt=0.0,
        description="Maximum distance mapped into the output range",
    )
    cutoff: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Fractional position of the zero-crossing in the output range",
    )
    bounds_strategy: BoundsStrategy = Field(
        default=BoundsStrategy.EXTENT,
        description="Bounding box search used for centering",
    )

    @property
    def size(self) -> int:
        """Side of the square canvas in pixels."""
        return self.font_size + 2 * self.buffer


class FontConfig(BaseModel):
    """Rasterizer-only font settings."""

    family: str = Field(
        default="DejaVuSans.ttf",
        description="Font file path or a font file name Pillow can locate",
    )
    weight: str = Field(
        default="normal",
        description="Named instance of a variable font, or 'normal'",
    )


class AtlasConfig(BaseModel):
    """Configuration for atlas packing."""

    columns: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Number of glyph cells per atlas row",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    skip_missing: bool = Field(
        default=True,
        description="Skip characters the font does not map",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphSDFSettings(BaseModel):
    """Main application settings."""

    sdf: SDFConfig = Field(default_factory=SDFConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    atlas: AtlasConfig = Field(default_factory=AtlasConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
