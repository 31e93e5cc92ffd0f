"""Bounding box representation.

This module defines the pixel-space rectangle that encloses the rendered
content of a glyph canvas. The box is returned alongside every SDF so
callers can compute placement and kerning offsets.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BoundingBox:
    """Integer pixel rectangle around a glyph's coverage.

    The box includes a one pixel margin on the top/left side and a two pixel
    margin on the bottom/right side of the located pixels. Only the top/left
    corner is clamped to the canvas.

    Attributes:
        x: Left column of the box
        y: Top row of the box
        width: Box width in pixels
        height: Box height in pixels
    """

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def degenerate(cls) -> "BoundingBox":
        """Box reported for a mask without any nonzero pixel.

        Returns:
            Zero-size box at the origin
        """
        return cls(x=0, y=0, width=0, height=0)

    def is_empty(self) -> bool:
        """Check if the box encloses no pixels.

        Returns:
            True if width or height is zero
        """
        return self.width == 0 or self.height == 0

    @property
    def right(self) -> int:
        """Column one past the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Row one past the bottom edge."""
        return self.y + self.height

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    def to_dict(self) -> dict[str, int]:
        """Serialize to dictionary for IPC and JSON output.

        Returns:
            Dictionary representation of the box
        """
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BoundingBox":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of the box

        Returns:
            BoundingBox instance
        """
        return cls(
            x=int(data["x"]),
            y=int(data["y"]),
            width=int(data["width"]),
            height=int(data["height"]),
        )
