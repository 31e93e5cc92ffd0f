"""glyphsdf - Turn rasterized glyphs into signed distance fields.

glyphsdf renders single characters from a TrueType/OpenType font into
antialiased coverage masks, centers them in a fixed-size canvas and encodes
each one as an 8-bit signed distance field (SDF). SDF glyphs can be scaled
and outlined cheaply by a renderer without re-rasterizing per size.

Example:
    $ glyphsdf Roboto-Regular.ttf --chars "ABC"

This will create Roboto-Regular-sdf.png holding one SDF cell per character
and Roboto-Regular-sdf.json with the cell positions and centering bounds.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
