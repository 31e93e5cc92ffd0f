"""SDF result representation.

This module defines the value returned by the glyph pipeline: the encoded
distance field bytes together with the bounding box used for centering.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from glyphsdf.domain.bounds import BoundingBox


@dataclass
class SDFResult:
    """Signed distance field for a single glyph.

    Attributes:
        glyph: Flat uint8 array of length ``size * size`` (row-major)
        bounds: Bounding box used to center the glyph in its canvas
        size: Side of the square canvas, 0 for the empty result
        char: Character the field was drawn from, if known
    """

    glyph: np.ndarray
    bounds: BoundingBox = field(default_factory=BoundingBox.degenerate)
    size: int = 0
    char: str | None = None

    @classmethod
    def empty(cls, char: str | None = None) -> "SDFResult":
        """Zero-length result for missing or blank input.

        Args:
            char: Character that produced no coverage, if any

        Returns:
            SDFResult with an empty glyph and degenerate bounds
        """
        return cls(glyph=np.zeros(0, dtype=np.uint8), char=char)

    def is_empty(self) -> bool:
        """Check if the result holds no distance field.

        Returns:
            True for the zero-length sentinel
        """
        return self.glyph.size == 0

    def as_grid(self) -> np.ndarray:
        """View the glyph bytes as a ``(size, size)`` grid.

        Returns:
            2D uint8 array (shape ``(0, 0)`` for the empty result)
        """
        return self.glyph.reshape(self.size, self.size)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the result
        """
        return {
            "glyph": self.glyph.tobytes(),
            "bounds": self.bounds.to_dict(),
            "size": self.size,
            "char": self.char,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SDFResult":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a result

        Returns:
            SDFResult instance
        """
        return cls(
            glyph=np.frombuffer(data["glyph"], dtype=np.uint8).copy(),
            bounds=BoundingBox.from_dict(data["bounds"]),
            size=data["size"],
            char=data.get("char"),
        )
