"""Re-position rendered glyph content at the canvas center."""

import logging

import numpy as np

from glyphsdf.config import BoundsStrategy
from glyphsdf.core.bounds import locate_bounds
from glyphsdf.domain import BoundingBox

logger = logging.getLogger(__name__)


def _copy_block(mask: np.ndarray, bounds: BoundingBox) -> np.ndarray:
    """Copy the pixels inside ``bounds``; area outside the canvas reads as 0."""
    height, width = mask.shape
    block = np.zeros((bounds.height, bounds.width), dtype=mask.dtype)

    src_right = min(bounds.right, width)
    src_bottom = min(bounds.bottom, height)
    if src_right > bounds.x and src_bottom > bounds.y:
        block[: src_bottom - bounds.y, : src_right - bounds.x] = mask[
            bounds.y : src_bottom, bounds.x : src_right
        ]
    return block


def _paste_block(canvas: np.ndarray, block: np.ndarray, x: int, y: int) -> None:
    """Paste ``block`` with its top-left corner at (x, y), clipped to the canvas."""
    height, width = canvas.shape
    block_height, block_width = block.shape

    dst_left, dst_top = max(x, 0), max(y, 0)
    dst_right = min(x + block_width, width)
    dst_bottom = min(y + block_height, height)
    if dst_right <= dst_left or dst_bottom <= dst_top:
        return

    canvas[dst_top:dst_bottom, dst_left:dst_right] = block[
        dst_top - y : dst_bottom - y, dst_left - x : dst_right - x
    ]


def center_contents(
    mask: np.ndarray,
    strategy: BoundsStrategy = BoundsStrategy.EXTENT,
) -> tuple[np.ndarray, BoundingBox]:
    """Move the bounded content of a mask to the middle of its canvas.

    The block inside the located bounding box is copied out, the canvas is
    cleared to zero coverage and the block is pasted back at
    ``((size - width) / 2, (size - height) / 2)`` truncated toward zero.
    Pixels are translated, never resampled.

    Args:
        mask: Square 2D coverage grid, not modified
        strategy: Bounding box search to use

    Returns:
        Tuple of (centered copy of the mask, bounds used for centering)
    """
    mask = np.asarray(mask)
    bounds = locate_bounds(mask, strategy)
    if bounds.is_empty():
        return mask.copy(), bounds

    height, width = mask.shape
    new_x = int((width - bounds.width) / 2.0)
    new_y = int((height - bounds.height) / 2.0)

    block = _copy_block(mask, bounds)
    centered = np.zeros_like(mask)
    _paste_block(centered, block, new_x, new_y)

    logger.debug(
        "Centered glyph content: bounds=%s offset=(%d, %d)",
        bounds.to_tuple(),
        new_x,
        new_y,
    )
    return centered, bounds
