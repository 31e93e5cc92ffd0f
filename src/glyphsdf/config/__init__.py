"""Configuration management for glyphsdf.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- SDFConfig: Canvas and distance field encoding settings
- FontConfig: Rasterizer font settings
- AtlasConfig: Atlas packing settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- GlyphSDFSettings: Main application settings
"""

from glyphsdf.config.settings import (
    AtlasConfig,
    BoundsStrategy,
    FontConfig,
    GlyphSDFSettings,
    LoggingConfig,
    ProcessingConfig,
    SDFConfig,
)

__all__ = [
    "AtlasConfig",
    "BoundsStrategy",
    "FontConfig",
    "GlyphSDFSettings",
    "LoggingConfig",
    "ProcessingConfig",
    "SDFConfig",
]
