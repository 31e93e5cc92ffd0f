"""Tests for the Felzenszwalb & Huttenlocher distance transform."""

import math

import numpy as np
import pytest

from glyphsdf.core.edt import INF, DistanceTransformWorkspace, _intersection, edt, edt1d
from glyphsdf.exceptions import GridShapeError


def run_edt1d(f: list[float]) -> list[float]:
    """Run the 1D transform on a fresh workspace and return the output."""
    n = len(f)
    ws = DistanceTransformWorkspace(n)
    ws.f[:n] = f
    edt1d(ws.f, ws.d, ws.v, ws.z, n)
    return ws.d[:n]


def brute_force(f: list[float]) -> list[float]:
    """O(n^2) reference: min over p of (q - p)^2 + f[p]."""
    n = len(f)
    return [min((q - p) ** 2 + f[p] for p in range(n)) for q in range(n)]


class TestEdt1d:
    """Tests for the 1D squared distance transform."""

    @pytest.mark.parametrize("seed", range(8))
    def test_matches_brute_force_random(self, seed: int):
        """Test the envelope against the brute-force minimum on random costs."""
        rng = np.random.default_rng(seed)
        f = rng.uniform(0.0, 40.0, size=16).tolist()

        assert run_edt1d(f) == pytest.approx(brute_force(f))

    @pytest.mark.parametrize("seed", range(8))
    def test_matches_brute_force_with_inf(self, seed: int):
        """Test sparse seeds mixed with INF costs, as built from coverage."""
        rng = np.random.default_rng(100 + seed)
        f = [INF] * 16
        for p in rng.choice(16, size=3, replace=False):
            f[int(p)] = float(rng.uniform(0.0, 0.25))

        assert run_edt1d(f) == pytest.approx(brute_force(f))

    def test_single_seed(self):
        """Test that one zero seed yields squared distance to it."""
        f = [INF] * 10
        f[3] = 0.0

        assert run_edt1d(f) == [float((q - 3) ** 2) for q in range(10)]

    def test_seed_at_each_end(self):
        """Test seeds on both boundaries."""
        f = [INF] * 7
        f[0] = 0.0
        f[6] = 0.0

        assert run_edt1d(f) == [0.0, 1.0, 4.0, 9.0, 4.0, 1.0, 0.0]

    def test_constant_costs(self):
        """Test that equal costs pass through unchanged (no ties break the stack)."""
        f = [2.5] * 12

        assert run_edt1d(f) == f

    def test_all_inf(self):
        """Test a line without seeds stays at INF and never divides by zero."""
        result = run_edt1d([INF] * 16)

        assert all(value >= INF for value in result)

    def test_single_sample(self):
        """Test n == 1."""
        assert run_edt1d([4.0]) == [4.0]

    def test_intersection_requires_increasing_apexes(self):
        """Test the q > v[k] invariant guarding the division."""
        f = [0.0, 0.0, 0.0]
        assert _intersection(f, 2, 1) == pytest.approx(1.5)
        with pytest.raises(AssertionError):
            _intersection(f, 1, 1)


class TestEdt:
    """Tests for the 2D Euclidean distance transform."""

    def test_single_zero_seed(self):
        """Test distance from one seed equals the Euclidean distance."""
        grid = np.full((9, 12), INF)
        grid[4, 7] = 0.0

        edt(grid)

        ys, xs = np.mgrid[0:9, 0:12]
        np.testing.assert_allclose(grid, np.hypot(xs - 7, ys - 4))

    def test_distance_grows_away_from_seed(self):
        """Test monotonic growth along rows and columns leaving the seed."""
        grid = np.full((11, 11), INF)
        grid[5, 5] = 0.0

        edt(grid)

        assert np.all(np.diff(grid[5, 5:]) > 0)
        assert np.all(np.diff(grid[5, :6]) < 0)
        assert np.all(np.diff(grid[5:, 5]) > 0)
        assert grid[5, 5] == 0.0

    def test_two_seeds_take_nearest(self):
        """Test each pixel measures to its nearest seed."""
        grid = np.full((5, 9), INF)
        grid[2, 0] = 0.0
        grid[2, 8] = 0.0

        edt(grid)

        assert grid[2, 4] == pytest.approx(4.0)
        assert grid[0, 1] == pytest.approx(math.hypot(1, 2))
        assert grid[4, 7] == pytest.approx(math.hypot(1, 2))

    def test_subpixel_seed_costs(self):
        """Test fractional seed costs are added before the square root."""
        grid = np.full((1, 4), INF)
        grid[0, 0] = 0.25

        edt(grid)

        expected = [math.sqrt(q * q + 0.25) for q in range(4)]
        np.testing.assert_allclose(grid[0], expected)

    def test_workspace_reuse_is_stateless(self):
        """Test a reused workspace gives the same result as a fresh one."""
        ws = DistanceTransformWorkspace(10)

        first = np.full((10, 10), INF)
        first[0, 0] = 0.0
        edt(first, ws)

        second = np.full((10, 10), INF)
        second[9, 3] = 0.0
        expected = second.copy()
        edt(second, ws)
        edt(expected, DistanceTransformWorkspace(10))

        np.testing.assert_array_equal(second, expected)

    def test_workspace_too_small(self):
        """Test a workspace shorter than the grid is rejected."""
        grid = np.zeros((8, 8))
        with pytest.raises(GridShapeError):
            edt(grid, DistanceTransformWorkspace(4))
