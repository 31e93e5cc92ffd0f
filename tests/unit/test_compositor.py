"""Tests for seed construction and signed distance encoding."""

import numpy as np
import pytest

from glyphsdf.core.compositor import SDFCompositor
from glyphsdf.core.edt import INF


@pytest.fixture
def compositor() -> SDFCompositor:
    """Compositor with the default radius and cutoff."""
    return SDFCompositor(radius=8.0, cutoff=0.25)


class TestBuildSeeds:
    """Tests for SDFCompositor.build_seeds."""

    def test_seed_costs(self, compositor: SDFCompositor):
        """Test each coverage class maps to its outer/inner cost."""
        mask = np.array([[1.0, 0.0, 0.25, 0.75, 0.5]])

        outer, inner = compositor.build_seeds(mask)

        np.testing.assert_array_equal(outer[0], [0.0, INF, 0.0625, 0.0, 0.0])
        np.testing.assert_array_equal(inner[0], [INF, 0.0, 0.0, 0.0625, 0.0])

    def test_seeds_are_float64(self, compositor: SDFCompositor):
        """Test seed grids are fresh float64 arrays of the mask's shape."""
        mask = np.zeros((4, 6), dtype=np.float32)

        outer, inner = compositor.build_seeds(mask)

        assert outer.shape == inner.shape == (4, 6)
        assert outer.dtype == inner.dtype == np.float64


class TestCombine:
    """Tests for SDFCompositor.combine."""

    def test_zero_distance_encodes_cutoff(self, compositor: SDFCompositor):
        """Test the edge sits at 255 * (1 - cutoff)."""
        encoded = compositor.combine(np.zeros((1, 1)), np.zeros((1, 1)))
        assert encoded.tolist() == [191]

    def test_rounds_to_nearest(self):
        """Test encoded values round to the nearest byte, halves upward."""
        compositor = SDFCompositor(radius=2.0, cutoff=0.0)

        # 255 - 255 * 0.5 = 127.5
        encoded = compositor.combine(np.array([[1.0]]), np.zeros((1, 1)))
        assert encoded.tolist() == [128]

        # 255 - 255 * 0.45 = 140.25
        encoded = compositor.combine(np.array([[0.9]]), np.zeros((1, 1)))
        assert encoded.tolist() == [140]

    def test_clamps_to_byte_range(self, compositor: SDFCompositor):
        """Test far inside saturates at 255 and far outside at 0."""
        outer = np.array([[0.0, 100.0]])
        inner = np.array([[100.0, 0.0]])

        assert compositor.combine(outer, inner).tolist() == [255, 0]

    def test_output_is_flat_uint8(self, compositor: SDFCompositor):
        """Test the encoding is a row-major byte sequence."""
        outer = np.arange(6, dtype=np.float64).reshape(2, 3)
        encoded = compositor.combine(outer, np.zeros((2, 3)))

        assert encoded.dtype == np.uint8
        assert encoded.shape == (6,)
        assert encoded[0] == 191
        assert list(encoded) == sorted(encoded, reverse=True)


class TestBuild:
    """Tests for SDFCompositor.build."""

    def test_sign_flips_at_half_coverage(self, compositor: SDFCompositor):
        """Test full pixels encode above the edge value and empty ones below."""
        mask = np.zeros((9, 9))
        mask[2:7, 2:7] = 1.0

        grid = compositor.build(mask).reshape(9, 9)

        assert np.all(grid[mask == 1.0] > 191)
        assert np.all(grid[mask == 0.0] < 191)

    def test_inside_and_outside_distances(self, compositor: SDFCompositor):
        """Test the fully covered and fully empty sides of an edge."""
        mask = np.zeros((1, 6))
        mask[0, :3] = 1.0

        grid = compositor.build(mask)

        # Inside pixels: outer 0, inner = distance to the first empty pixel
        # Outside pixels: inner 0, outer = distance to the last full pixel
        signed = np.array([-3.0, -2.0, -1.0, 1.0, 2.0, 3.0])
        expected = np.clip(np.floor(255 - 255 * (signed / 8.0 + 0.25) + 0.5), 0, 255)
        np.testing.assert_array_equal(grid, expected.astype(np.uint8))
