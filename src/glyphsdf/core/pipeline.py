"""Glyph to signed distance field pipeline.

Runs the stages in order: locate and center the glyph content, build the
outer and inner seed grids, transform both, and encode the signed result.
"""

import logging

import numpy as np

from glyphsdf.config import FontConfig, SDFConfig
from glyphsdf.core.centering import center_contents
from glyphsdf.core.compositor import SDFCompositor
from glyphsdf.core.edt import DistanceTransformWorkspace
from glyphsdf.domain import SDFResult
from glyphsdf.exceptions import CoverageRangeError, MaskShapeError
from glyphsdf.io.rasterizer import PillowRasterizer, Rasterizer

logger = logging.getLogger(__name__)


def _normalize_mask(mask: np.ndarray) -> np.ndarray:
    """Convert coverage to floats in [0, 1].

    Integer masks of any width hold 8-bit coverage and are divided by 255.

    Raises:
        CoverageRangeError: If any value falls outside the range
    """
    if np.issubdtype(mask.dtype, np.integer):
        coverage = mask.astype(np.float64) / 255.0
    else:
        coverage = mask.astype(np.float64)

    low, high = float(coverage.min()), float(coverage.max())
    if low < 0.0 or high > 1.0:
        raise CoverageRangeError(low, high)
    return coverage


class GlyphSDFPipeline:
    """Produces SDF glyphs for a fixed canvas size.

    Every call allocates its own distance transform workspace, so one
    pipeline can serve several threads at once.

    Example:
        pipeline = GlyphSDFPipeline(SDFConfig(font_size=24, buffer=3))
        result = pipeline.draw("A")
        grid = result.as_grid()
    """

    def __init__(
        self,
        config: SDFConfig | None = None,
        font: FontConfig | None = None,
        rasterizer: Rasterizer | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Canvas and encoding settings
            font: Font family and weight handed to the rasterizer
            rasterizer: Backend used by ``draw``; defaults to Pillow
        """
        self.config = config or SDFConfig()
        self.font = font or FontConfig()
        self.rasterizer = rasterizer or PillowRasterizer(buffer=self.config.buffer)
        self.compositor = SDFCompositor(
            radius=self.config.radius,
            cutoff=self.config.cutoff,
        )

    @property
    def size(self) -> int:
        """Side of the square canvas in pixels."""
        return self.config.size

    def render(self, mask: np.ndarray | None, char: str | None = None) -> SDFResult:
        """Encode a coverage mask as a centered SDF.

        Args:
            mask: Square coverage grid of side ``size``, integer (0-255) or
                float (0-1). ``None`` or an empty array is accepted.
            char: Character the mask was rendered from, recorded on the result

        Returns:
            SDFResult; the zero-length result when the mask is missing,
            empty, or has no coverage at all

        Raises:
            MaskShapeError: If the mask is not ``size`` x ``size``
            CoverageRangeError: If coverage falls outside [0, 1] (0-255 for
                integer masks)
        """
        if mask is None or np.size(mask) == 0:
            return SDFResult.empty(char)

        mask = np.asarray(mask)
        if mask.shape != (self.size, self.size):
            raise MaskShapeError(self.size, mask.shape)

        coverage = _normalize_mask(mask)
        if not np.any(coverage > 0):
            logger.debug("Mask has no coverage, returning empty result")
            return SDFResult.empty(char)

        centered, bounds = center_contents(coverage, self.config.bounds_strategy)

        workspace = DistanceTransformWorkspace(self.size)
        glyph = self.compositor.build(centered, workspace)
        return SDFResult(glyph=glyph, bounds=bounds, size=self.size, char=char)

    def draw(self, text: str | None) -> SDFResult:
        """Rasterize and encode the first character of ``text``.

        Args:
            text: Character to draw; longer strings are truncated to their
                first character

        Returns:
            SDFResult; the zero-length result for missing or empty text
        """
        if not text:
            return SDFResult.empty()

        char = text[0]
        if len(text) > 1:
            logger.debug("Truncating %r to its first character", text)

        rendered = self.rasterizer.rasterize(
            char,
            self.config.font_size,
            self.font.family,
            self.font.weight,
        )
        return self.render(rendered.mask, char=char)


def render_sdf(mask: np.ndarray | None, config: SDFConfig | None = None) -> SDFResult:
    """Encode a coverage mask with a one-off pipeline.

    Args:
        mask: Square coverage grid of side ``config.size``
        config: Canvas and encoding settings (defaults if None)

    Returns:
        SDFResult for the mask
    """
    return GlyphSDFPipeline(config).render(mask)
