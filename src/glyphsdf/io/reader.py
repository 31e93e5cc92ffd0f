"""Font reader for inspecting TTF/OTF fonts.

This module provides the FontReader class, which exposes the font facts the
SDF generator needs before rasterizing: family name, weight, variable font
instances and the set of mapped characters.
"""

from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from glyphsdf.exceptions import FontFormatError


class FontReader:
    """Loads TTF/OTF fonts and reports their character coverage.

    Example:
        reader = FontReader(Path("font.ttf"))
        reader.load()
        for char in reader.characters():
            print(char)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._cmap: dict[int, str] | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FontFormatError: If the file is not a readable font
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            self._font = TTFont(str(self._font_path), lazy=True)
        except TTLibError as e:
            raise FontFormatError(str(self._font_path), str(e)) from e

    def _loaded(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def path(self) -> Path:
        """Path of the font file."""
        return self._font_path

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for CFF based fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._loaded()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def family_name(self) -> str:
        """Return the font's preferred family name.

        Falls back to the file stem for fonts without a usable name table.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._loaded()
        if "name" in font:
            name = font["name"].getBestFamilyName()
            if name:
                return name
        return self._font_path.stem

    @property
    def weight_class(self) -> int:
        """Return the OS/2 weight class (400 when the table is missing).

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._loaded()
        if "OS/2" in font:
            return font["OS/2"].usWeightClass
        return 400

    @property
    def is_variable(self) -> bool:
        """Return True if the font has variation axes.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return "fvar" in self._loaded()

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._loaded()["maxp"].numGlyphs

    def instance_names(self) -> list[str]:
        """Return the named instances of a variable font.

        These are the values accepted as a rasterizer ``weight``.

        Returns:
            Instance names in font order, empty for static fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._loaded()
        if "fvar" not in font:
            return []

        name_table = font["name"]
        names = []
        for instance in font["fvar"].instances:
            name = name_table.getDebugName(instance.subfamilyNameID)
            if name:
                names.append(name)
        return names

    def _best_cmap(self) -> dict[int, str]:
        if self._cmap is None:
            self._cmap = self._loaded().getBestCmap() or {}
        return self._cmap

    def characters(self) -> list[str]:
        """Return every printable character the font maps, by code point.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return [chr(cp) for cp in sorted(self._best_cmap()) if chr(cp).isprintable()]

    def has_character(self, char: str) -> bool:
        """Check if the font maps a character to a glyph.

        Args:
            char: Single character to look up

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return ord(char) in self._best_cmap()

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._cmap = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
