"""Shared fixtures for glyphsdf tests."""

from pathlib import Path

import numpy as np
import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from glyphsdf.config import LoggingConfig

GLYPH_ORDER = [".notdef", "space", "A", "O"]


def _draw_rect(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int, clockwise: bool = True) -> None:
    """Draw a rectangle contour (clockwise = filled in TrueType)."""
    if clockwise:
        points = [(x0, y0), (x0, y1), (x1, y1), (x1, y0)]
    else:
        points = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    pen.moveTo(points[0])
    for point in points[1:]:
        pen.lineTo(point)
    pen.closePath()


def build_test_font(path: Path) -> Path:
    """Build a small TrueType font.

    Maps space (empty), A (solid block) and O (block with a hole).
    """
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap({0x20: "space", 0x41: "A", 0x4F: "O"})

    glyphs = {}

    pen = TTGlyphPen(None)
    _draw_rect(pen, 50, 0, 450, 700)
    glyphs[".notdef"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()

    pen = TTGlyphPen(None)
    _draw_rect(pen, 100, 0, 500, 700)
    glyphs["A"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_rect(pen, 100, 0, 600, 700)
    _draw_rect(pen, 250, 200, 450, 500, clockwise=False)
    glyphs["O"] = pen.glyph()

    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics({name: (700, 50) for name in GLYPH_ORDER})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Glyphsdf Test", "styleName": "Regular"})
    fb.setupOS2(
        sTypoAscender=800,
        sTypoDescender=-200,
        usWinAscent=800,
        usWinDescent=200,
        usWeightClass=400,
    )
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def test_font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Path to the generated test font."""
    return build_test_font(tmp_path_factory.mktemp("fonts") / "GlyphsdfTest-Regular.ttf")


@pytest.fixture
def logging_config(tmp_path: Path) -> LoggingConfig:
    """Logging config that writes into the test's temp dir."""
    return LoggingConfig(log_file=tmp_path / "glyphsdf.log")


@pytest.fixture
def center_pixel_mask() -> np.ndarray:
    """11x11 float mask with one fully covered pixel at the center."""
    mask = np.zeros((11, 11))
    mask[5, 5] = 1.0
    return mask


@pytest.fixture
def square_mask() -> np.ndarray:
    """30x30 uint8 mask with an off-center solid square and soft edges."""
    mask = np.zeros((30, 30), dtype=np.uint8)
    mask[4:14, 6:16] = 255
    mask[3, 6:16] = 128
    mask[14, 6:16] = 64
    return mask


@pytest.fixture
def font_factory(tmp_path: Path):
    """Build the test font under a chosen file name in the test's temp dir."""

    def _build(name: str = "Sample.ttf") -> Path:
        return build_test_font(tmp_path / name)

    return _build
