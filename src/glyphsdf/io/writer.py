"""Atlas writer for saving SDF glyphs.

This module provides the AtlasWriter class, which packs SDF results into a
grid image and writes a JSON map describing where each character lives and
the bounds it was centered with.
"""

import json
from pathlib import Path
from typing import Any

from PIL import Image

from glyphsdf.domain import SDFResult
from glyphsdf.exceptions import AtlasSaveError


class AtlasWriter:
    """Packs SDF glyphs into a grid atlas PNG with a JSON map.

    Glyphs are laid out left to right, top to bottom, one ``cell_size``
    square per non-empty glyph. Characters with no coverage (spaces) are
    listed in the map without a cell.

    Example:
        writer = AtlasWriter(cell_size=30, columns=16)
        writer.add(result)
        writer.save(Path("atlas.png"))
    """

    def __init__(
        self,
        cell_size: int,
        columns: int = 16,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the atlas writer.

        Args:
            cell_size: Side of one glyph cell (the SDF canvas size)
            columns: Number of cells per atlas row
            metadata: Extra fields written at the top of the JSON map
        """
        self.cell_size = cell_size
        self.columns = columns
        self.metadata = metadata or {}
        self._results: list[SDFResult] = []

    @property
    def glyph_count(self) -> int:
        """Number of glyphs occupying a cell."""
        return sum(1 for r in self._results if not r.is_empty())

    @property
    def rows(self) -> int:
        """Number of cell rows needed for the current glyphs."""
        return max(1, -(-self.glyph_count // self.columns))

    def add(self, result: SDFResult) -> None:
        """Queue a glyph for the atlas.

        Args:
            result: SDF of one character; ``result.char`` must be set

        Raises:
            ValueError: If the result has no character or the wrong size
        """
        if result.char is None:
            raise ValueError("Atlas glyphs must record their character")
        if not result.is_empty() and result.size != self.cell_size:
            raise ValueError(
                f"Glyph {result.char!r} has size {result.size}, atlas cells are {self.cell_size}"
            )
        self._results.append(result)

    def build_map(self) -> dict[str, Any]:
        """Build the JSON-serializable atlas description.

        Returns:
            Dictionary with atlas geometry and a per-character entry
        """
        glyphs: dict[str, Any] = {}
        index = 0
        for result in self._results:
            entry: dict[str, Any] = {"bounds": result.bounds.to_dict()}
            if result.is_empty():
                entry["empty"] = True
            else:
                entry.update(
                    {
                        "index": index,
                        "x": (index % self.columns) * self.cell_size,
                        "y": (index // self.columns) * self.cell_size,
                        "width": self.cell_size,
                        "height": self.cell_size,
                    }
                )
                index += 1
            glyphs[result.char] = entry  # type: ignore[index]

        return {
            **self.metadata,
            "cell": self.cell_size,
            "columns": self.columns,
            "rows": self.rows,
            "count": index,
            "glyphs": glyphs,
        }

    def build_image(self) -> Image.Image:
        """Paste every non-empty glyph into a grayscale atlas image.

        Returns:
            Pillow image in mode "L"
        """
        image = Image.new(
            "L",
            (self.columns * self.cell_size, self.rows * self.cell_size),
            0,
        )
        index = 0
        for result in self._results:
            if result.is_empty():
                continue
            x = (index % self.columns) * self.cell_size
            y = (index // self.columns) * self.cell_size
            image.paste(Image.fromarray(result.as_grid()), (x, y))
            index += 1
        return image

    def save(self, image_path: Path, map_path: Path | None = None) -> Path:
        """Write the atlas image and its JSON map.

        Args:
            image_path: Destination PNG path
            map_path: Destination JSON path (image path with .json if None)

        Returns:
            Path of the written JSON map

        Raises:
            AtlasSaveError: If either file cannot be written
        """
        if map_path is None:
            map_path = image_path.with_suffix(".json")

        try:
            self.build_image().save(image_path)
        except OSError as e:
            raise AtlasSaveError(str(image_path), str(e)) from e

        try:
            with open(map_path, "w", encoding="utf-8") as f:
                json.dump(self.build_map(), f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise AtlasSaveError(str(map_path), str(e)) from e

        return map_path

    @staticmethod
    def get_atlas_path(font_path: Path) -> Path:
        """Generate the default atlas path for a font.

        Converts: font.ttf -> font-sdf.png
                  Roboto-Regular.otf -> Roboto-Regular-sdf.png

        Args:
            font_path: Font file path

        Returns:
            PNG path beside the font
        """
        return font_path.parent / f"{font_path.stem}-sdf.png"
