"""Unit tests for the I/O layer.

Tests for FontReader, PillowRasterizer, and AtlasWriter.
"""

import json
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from glyphsdf.domain import BoundingBox, SDFResult
from glyphsdf.exceptions import AtlasSaveError, FontFormatError, RasterizerError
from glyphsdf.io.rasterizer import PillowRasterizer
from glyphsdf.io.reader import FontReader
from glyphsdf.io.writer import AtlasWriter


def make_result(char: str, value: int = 200, size: int = 4) -> SDFResult:
    """Create a filled SDF result of the given size."""
    return SDFResult(
        glyph=np.full(size * size, value, dtype=np.uint8),
        bounds=BoundingBox(x=1, y=2, width=3, height=2),
        size=size,
        char=char,
    )


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader.path == path
        assert reader._font is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_load_invalid_file(self, tmp_path):
        """Test loading a file that is not a font raises FontFormatError."""
        path = tmp_path / "broken.ttf"
        path.write_bytes(b"definitely not a font")

        reader = FontReader(path)
        with pytest.raises(FontFormatError, match="broken.ttf"):
            reader.load()

    def test_format_before_load(self):
        """Test accessing format before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.format

    def test_characters_before_load(self):
        """Test listing characters before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            reader.characters()

    def test_font_facts(self, test_font_path):
        """Test the reported facts of the generated font."""
        with FontReader(test_font_path) as reader:
            assert reader.format == "TrueType"
            assert reader.family_name == "Glyphsdf Test"
            assert reader.weight_class == 400
            assert reader.glyph_count == 4
            assert reader.is_variable is False
            assert reader.instance_names() == []

    def test_characters(self, test_font_path):
        """Test mapped characters are listed by code point."""
        with FontReader(test_font_path) as reader:
            assert reader.characters() == [" ", "A", "O"]
            assert reader.has_character("A")
            assert not reader.has_character("Z")

    def test_close(self, test_font_path):
        """Test the context manager closes the font."""
        with FontReader(test_font_path) as reader:
            pass

        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.glyph_count


class TestPillowRasterizer:
    """Tests for PillowRasterizer class."""

    def test_rasterize_shape(self, test_font_path):
        """Test the canvas is font size plus buffer on each side."""
        rasterizer = PillowRasterizer(buffer=3)

        glyph = rasterizer.rasterize("A", 24, str(test_font_path))

        assert glyph.width == 30
        assert glyph.height == 30
        assert glyph.mask.shape == (30, 30)
        assert glyph.mask.dtype == np.float64
        assert 0 <= glyph.baseline <= 30

    def test_rasterize_coverage(self, test_font_path):
        """Test a solid glyph has fully covered pixels and a clear buffer."""
        glyph = PillowRasterizer(buffer=3).rasterize("A", 24, str(test_font_path))

        assert glyph.mask.max() == 1.0
        assert glyph.mask.min() == 0.0
        # Text starts at x = buffer
        assert not glyph.mask[:, :3].any()

    def test_rasterize_blank(self, test_font_path):
        """Test a space renders no coverage."""
        glyph = PillowRasterizer().rasterize(" ", 24, str(test_font_path))

        assert not glyph.mask.any()

    def test_font_cache(self, test_font_path):
        """Test fonts are loaded once per family, size and weight."""
        rasterizer = PillowRasterizer()
        rasterizer.rasterize("A", 24, str(test_font_path))
        rasterizer.rasterize("O", 24, str(test_font_path))
        rasterizer.rasterize("A", 12, str(test_font_path))

        assert len(rasterizer._fonts) == 2

    def test_missing_font(self, tmp_path):
        """Test a font that cannot be opened raises RasterizerError."""
        with pytest.raises(RasterizerError, match="missing.ttf"):
            PillowRasterizer().rasterize("A", 24, str(tmp_path / "missing.ttf"))

    def test_weight_on_static_font(self, test_font_path):
        """Test selecting a weight needs a variable font."""
        with pytest.raises(RasterizerError, match="Bold"):
            PillowRasterizer().rasterize("A", 24, str(test_font_path), weight="Bold")


class TestAtlasWriter:
    """Tests for AtlasWriter class."""

    def test_add_requires_char(self):
        """Test results without a character are rejected."""
        writer = AtlasWriter(cell_size=4)
        result = make_result("A")
        result.char = None

        with pytest.raises(ValueError, match="character"):
            writer.add(result)

    def test_add_rejects_wrong_size(self):
        """Test results must match the cell size."""
        writer = AtlasWriter(cell_size=5)

        with pytest.raises(ValueError, match="size 4"):
            writer.add(make_result("A"))

    def test_add_accepts_empty(self):
        """Test empty results are accepted whatever the cell size."""
        writer = AtlasWriter(cell_size=5)
        writer.add(SDFResult.empty(" "))

        assert writer.glyph_count == 0
        assert writer.rows == 1

    def test_build_map(self):
        """Test cell positions wrap at the column count."""
        writer = AtlasWriter(cell_size=4, columns=2, metadata={"radius": 8.0})
        for char in "AB":
            writer.add(make_result(char))
        writer.add(SDFResult.empty(" "))
        writer.add(make_result("C"))

        atlas_map = writer.build_map()

        assert atlas_map["radius"] == 8.0
        assert atlas_map["cell"] == 4
        assert atlas_map["columns"] == 2
        assert atlas_map["rows"] == 2
        assert atlas_map["count"] == 3
        assert atlas_map["glyphs"]["B"] == {
            "bounds": {"x": 1, "y": 2, "width": 3, "height": 2},
            "index": 1,
            "x": 4,
            "y": 0,
            "width": 4,
            "height": 4,
        }
        assert atlas_map["glyphs"]["C"]["x"] == 0
        assert atlas_map["glyphs"]["C"]["y"] == 4
        assert atlas_map["glyphs"][" "] == {
            "bounds": {"x": 0, "y": 0, "width": 0, "height": 0},
            "empty": True,
        }

    def test_build_image(self):
        """Test glyph cells are pasted in order."""
        writer = AtlasWriter(cell_size=4, columns=2)
        writer.add(make_result("A", value=10))
        writer.add(make_result("B", value=20))
        writer.add(make_result("C", value=30))

        pixels = np.asarray(writer.build_image())

        assert pixels.shape == (8, 8)
        assert pixels[0, 0] == 10
        assert pixels[0, 4] == 20
        assert pixels[4, 0] == 30
        assert pixels[4, 4] == 0

    def test_save(self, tmp_path):
        """Test the image and JSON map are written side by side."""
        writer = AtlasWriter(cell_size=4)
        writer.add(make_result("A"))

        map_path = writer.save(tmp_path / "atlas.png")

        assert map_path == tmp_path / "atlas.json"
        with Image.open(tmp_path / "atlas.png") as image:
            assert image.size == (64, 4)
        assert json.loads(map_path.read_text(encoding="utf-8"))["count"] == 1

    def test_save_custom_map_path(self, tmp_path):
        """Test the JSON map can be written elsewhere."""
        writer = AtlasWriter(cell_size=4)
        writer.add(make_result("A"))

        map_path = writer.save(tmp_path / "atlas.png", tmp_path / "metrics.json")

        assert map_path == tmp_path / "metrics.json"
        assert map_path.exists()

    def test_save_unwritable(self, tmp_path):
        """Test write failures raise AtlasSaveError."""
        writer = AtlasWriter(cell_size=4)

        with pytest.raises(AtlasSaveError):
            writer.save(tmp_path / "missing-dir" / "atlas.png")

    def test_get_atlas_path(self):
        """Test atlas path generation."""
        assert AtlasWriter.get_atlas_path(Path("/fonts/Roboto-Regular.otf")) == Path(
            "/fonts/Roboto-Regular-sdf.png"
        )
