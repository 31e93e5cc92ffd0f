"""I/O layer for glyphsdf.

This module handles everything outside the numeric core: reading font
facts with fonttools, rasterizing characters with Pillow, and writing
atlases of finished SDF glyphs.

Key classes:
- FontReader: Load fonts and list their characters
- PillowRasterizer: Render characters into coverage masks
- AtlasWriter: Save SDF glyphs as a PNG grid with a JSON map
"""

from glyphsdf.io.rasterizer import PillowRasterizer, RasterizedGlyph, Rasterizer
from glyphsdf.io.reader import FontReader
from glyphsdf.io.writer import AtlasWriter

__all__ = [
    "AtlasWriter",
    "FontReader",
    "PillowRasterizer",
    "RasterizedGlyph",
    "Rasterizer",
]
