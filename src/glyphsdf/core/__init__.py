"""Core processing algorithms for glyphsdf.

This module contains the numeric pipeline that turns a coverage mask into
a signed distance field:

- Bounding box location and content centering
- Felzenszwalb & Huttenlocher squared Euclidean distance transform
- Seed construction and signed distance encoding
- Orchestration for single glyphs and whole fonts

All numeric stages are:
- Synchronous and bounded (fixed-size grids)
- Free of shared state (scratch buffers are scoped to one call)

Key functions:
- locate_bounds: Padded bounding box of nonzero coverage
- center_contents: Translate content to the canvas center
- edt1d: 1D squared distance transform (lower envelope of parabolas)
- edt: 2D Euclidean distance transform, in place
- render_sdf: One-off mask to SDF conversion
- process_glyph: Picklable per-character worker

Key classes:
- DistanceTransformWorkspace: Scratch buffers for the transform
- SDFCompositor: Seed grids and signed distance encoding
- GlyphSDFPipeline: Mask or character to SDFResult
- GlyphProcessor: Parallel atlas generation for a font
"""

from glyphsdf.core.bounds import locate_bounds
from glyphsdf.core.centering import center_contents
from glyphsdf.core.compositor import SDFCompositor
from glyphsdf.core.edt import INF, DistanceTransformWorkspace, edt, edt1d
from glyphsdf.core.pipeline import GlyphSDFPipeline, render_sdf
from glyphsdf.core.processor import GlyphProcessor, process_glyph

__all__ = [
    # Distance transform
    "INF",
    "DistanceTransformWorkspace",
    # Pipeline classes
    "GlyphProcessor",
    "GlyphSDFPipeline",
    "SDFCompositor",
    # Functions
    "center_contents",
    "edt",
    "edt1d",
    "locate_bounds",
    "process_glyph",
    "render_sdf",
]
