"""Domain models for glyphsdf.

This module contains the value types passed between the numeric core, the
rasterizer and the atlas writer. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of the rasterizing backend

Key classes:
- BoundingBox: Pixel rectangle around a glyph's coverage
- SDFResult: Encoded distance field plus its centering bounds
"""

from glyphsdf.domain.bounds import BoundingBox
from glyphsdf.domain.result import SDFResult

__all__: list[str] = [
    "BoundingBox",
    "SDFResult",
]
