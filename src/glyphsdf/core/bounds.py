"""Bounding box location over coverage masks.

The default ``EXTENT`` strategy takes the min/max row and column over every
nonzero pixel. ``SCAN`` reproduces the classic glyph atlas search bit for bit: it
walks the canvas column by column and keeps only the first nonzero pixel met from
each corner. On glyphs whose outermost columns do not reach the top or
bottom rows (O, V, disjoint blobs) that box clips content, and for some
masks it comes out inverted; sizes are then clamped to zero.
"""

import logging

import numpy as np

from glyphsdf.config import BoundsStrategy
from glyphsdf.domain import BoundingBox

logger = logging.getLogger(__name__)


def _scan_corners(mask: np.ndarray) -> tuple[int, int, int, int] | None:
    """Find the first nonzero pixel scanning from each corner, columns outer."""
    columns = np.flatnonzero(mask.any(axis=0))
    if columns.size == 0:
        return None

    min_x = int(columns[0])
    min_y = int(np.flatnonzero(mask[:, min_x])[0])
    max_x = int(columns[-1])
    max_y = int(np.flatnonzero(mask[:, max_x])[-1])
    return min_x, min_y, max_x, max_y


def _extent_corners(mask: np.ndarray) -> tuple[int, int, int, int] | None:
    """Find the min/max row and column over all nonzero pixels."""
    rows = np.flatnonzero(mask.any(axis=1))
    columns = np.flatnonzero(mask.any(axis=0))
    if columns.size == 0:
        return None

    return int(columns[0]), int(rows[0]), int(columns[-1]), int(rows[-1])


def locate_bounds(
    mask: np.ndarray,
    strategy: BoundsStrategy = BoundsStrategy.EXTENT,
) -> BoundingBox:
    """Locate the padded bounding box of a coverage mask.

    The located pixel corners are encased rather than targeted directly:
    one pixel is added before the top-left corner and two after the
    bottom-right corner. The top-left corner is then clamped to the canvas.

    Args:
        mask: 2D coverage grid, any pixel above zero counts as content
        strategy: Corner search to use

    Returns:
        Padded bounding box, or ``BoundingBox.degenerate()`` when the mask
        has no nonzero pixel. Width and height are never negative.

    Examples:
        >>> mask = np.zeros((8, 8))
        >>> mask[3, 4] = 1.0
        >>> locate_bounds(mask)
        BoundingBox(x=3, y=2, width=3, height=3)
    """
    content = np.asarray(mask) > 0
    if strategy == BoundsStrategy.EXTENT:
        corners = _extent_corners(content)
    else:
        corners = _scan_corners(content)

    if corners is None:
        logger.debug("No coverage found, using degenerate bounds")
        return BoundingBox.degenerate()

    min_x, min_y, max_x, max_y = corners

    min_x = max(min_x - 1, 0)
    min_y = max(min_y - 1, 0)
    max_x += 2
    max_y += 2

    return BoundingBox(
        x=min_x,
        y=min_y,
        width=max(max_x - min_x, 0),
        height=max(max_y - min_y, 0),
    )
