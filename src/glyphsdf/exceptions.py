"""Exception hierarchy for glyphsdf."""


class GlyphSDFError(Exception):
    """Base exception for all glyphsdf errors."""

    pass


class FontError(GlyphSDFError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontFormatError(FontError):
    """Unsupported or invalid font format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid font format '{path}': {details}")


class GridError(GlyphSDFError):
    """Errors in the shape of numeric grids."""

    pass


class MaskShapeError(GridError):
    """Coverage mask does not match the configured canvas."""

    def __init__(self, expected: int, shape: tuple[int, ...]) -> None:
        self.expected = expected
        self.shape = shape
        super().__init__(
            f"Coverage mask must be {expected}x{expected}, got shape {shape}"
        )


class CoverageRangeError(GridError):
    """Coverage mask holds values outside the accepted range."""

    def __init__(self, low: float, high: float) -> None:
        self.low = low
        self.high = high
        super().__init__(
            f"Coverage must lie in [0, 1] (or 0-255 for integer masks), got values in [{low}, {high}]"
        )


class GridShapeError(GridError):
    """Distance transform workspace is too small for a grid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class RasterizerError(GlyphSDFError):
    """Error rendering a character into a coverage mask."""

    def __init__(self, family: str, reason: str) -> None:
        self.family = family
        self.reason = reason
        super().__init__(f"Rasterizing with '{family}' failed: {reason}")


class AtlasError(GlyphSDFError):
    """Errors related to atlas packing or output."""

    pass


class AtlasSaveError(AtlasError):
    """Error saving an atlas image or its metrics map."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save atlas '{path}': {reason}")
