"""Glyph rasterizers producing coverage masks.

The distance field core only needs a single-character coverage mask of a
known size. Any backend that satisfies the ``Rasterizer`` protocol can feed
it; ``PillowRasterizer`` renders TrueType/OpenType fonts through Pillow's
FreeType bindings.
"""

from dataclasses import dataclass
from typing import Protocol

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from glyphsdf.exceptions import RasterizerError


@dataclass
class RasterizedGlyph:
    """Coverage mask of a single rendered character.

    Attributes:
        mask: 2D float64 coverage grid with values in [0, 1]
        width: Canvas width in pixels
        height: Canvas height in pixels
        baseline: Row of the alphabetic baseline on the canvas
    """

    mask: np.ndarray
    width: int
    height: int
    baseline: int


class Rasterizer(Protocol):
    """Renders one character into a square coverage mask."""

    def rasterize(
        self,
        char: str,
        font_size: int,
        family: str,
        weight: str = "normal",
    ) -> RasterizedGlyph:
        """Render ``char`` at ``font_size`` pixels."""
        ...


class PillowRasterizer:
    """Rasterizes characters with Pillow's FreeType font rendering.

    The canvas is square with side ``font_size + 2 * buffer``. Text is
    drawn from ``x = buffer`` with its vertical middle on the canvas middle
    row, leaving room for the distance falloff on every side.

    Example:
        rasterizer = PillowRasterizer(buffer=3)
        glyph = rasterizer.rasterize("A", 24, "DejaVuSans.ttf")
    """

    def __init__(self, buffer: int = 3) -> None:
        """Initialize the rasterizer.

        Args:
            buffer: Padding in pixels on each side of the canvas
        """
        self.buffer = buffer
        self._fonts: dict[tuple[str, int, str], ImageFont.FreeTypeFont] = {}

    def _load_font(self, family: str, font_size: int, weight: str) -> ImageFont.FreeTypeFont:
        key = (family, font_size, weight)
        if key in self._fonts:
            return self._fonts[key]

        try:
            font = ImageFont.truetype(family, font_size)
        except OSError as e:
            raise RasterizerError(family, str(e)) from e

        if weight != "normal":
            self._apply_weight(font, family, weight)

        self._fonts[key] = font
        return font

    @staticmethod
    def _apply_weight(font: ImageFont.FreeTypeFont, family: str, weight: str) -> None:
        """Select the named instance of a variable font matching ``weight``."""
        try:
            names = font.get_variation_names()
        except (OSError, NotImplementedError) as e:
            raise RasterizerError(
                family, f"weight '{weight}' requested but font is not variable"
            ) from e

        for name in names:
            if name.decode("utf-8", "replace").lower() == weight.lower():
                font.set_variation_by_name(name)
                return

        available = ", ".join(n.decode("utf-8", "replace") for n in names)
        raise RasterizerError(family, f"unknown weight '{weight}' (available: {available})")

    def rasterize(
        self,
        char: str,
        font_size: int,
        family: str,
        weight: str = "normal",
    ) -> RasterizedGlyph:
        """Render a character into a coverage mask.

        Args:
            char: Character to draw
            font_size: Font size in pixels
            family: Font file path, or a file name Pillow can locate
            weight: Named variable font instance, or "normal"

        Returns:
            RasterizedGlyph with a float coverage mask

        Raises:
            RasterizerError: If the font cannot be loaded or the weight is
                not available
        """
        size = font_size + 2 * self.buffer
        font = self._load_font(family, font_size, weight)

        image = Image.new("L", (size, size), 0)
        draw = ImageDraw.Draw(image)
        middle = (size + 1) // 2
        draw.text((self.buffer, middle), char, font=font, fill=255, anchor="lm")

        ascent, descent = font.getmetrics()
        return RasterizedGlyph(
            mask=np.asarray(image, dtype=np.float64) / 255.0,
            width=size,
            height=size,
            baseline=middle + (ascent - descent) // 2,
        )
