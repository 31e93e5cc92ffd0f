"""Squared Euclidean distance transform.

Implements the separable distance transform of Felzenszwalb & Huttenlocher
(https://cs.brown.edu/~pff/papers/dt-final.pdf). The 1D transform computes,
for every index q, ``min over p of (q - p)**2 + f[p]``: the lower envelope of
upward parabolas rooted at each p with height f[p]. The 2D transform runs it
over every column and then over every row.

Each 1D pass is O(n), so a full transform is O(width * height).
"""

import numpy as np

from glyphsdf.exceptions import GridShapeError

# Must dominate any realizable (q - p)**2 + f[p] on a glyph canvas.
INF = 1e20


class DistanceTransformWorkspace:
    """Scratch buffers for the 1D transform.

    ``f`` holds the input line, ``d`` the output line, ``v`` the stack of
    parabola apexes and ``z`` the boundaries between envelope segments.
    Every slot is written before it is read within a transform call, so a
    workspace carries no state between calls. A workspace must not be shared
    by two transforms running at the same time.

    Attributes:
        size: Longest line (grid side) the buffers can hold
    """

    def __init__(self, size: int) -> None:
        self.size = size
        self.f = [0.0] * size
        self.d = [0.0] * size
        self.v = [0] * size
        self.z = [0.0] * (size + 1)


def _intersection(f: list[float], q: int, p: int) -> float:
    """X coordinate where the parabolas rooted at q and p cross."""
    assert q > p, "parabola apexes must be pushed in increasing order"
    return ((f[q] + q * q) - (f[p] + p * p)) / (2 * q - 2 * p)


def edt1d(f: list[float], d: list[float], v: list[int], z: list[float], n: int) -> None:
    """1D squared distance transform of ``f[0:n]`` into ``d[0:n]``.

    Args:
        f: Cost per index (0 at seeds, ``INF`` where there is no seed)
        d: Output squared distances
        v: Scratch stack of parabola apex indices, length >= n
        z: Scratch envelope boundaries, length >= n + 1
        n: Number of samples to transform
    """
    v[0] = 0
    z[0] = -INF
    z[1] = INF

    k = 0
    for q in range(1, n):
        s = _intersection(f, q, v[k])
        while s <= z[k]:
            k -= 1
            s = _intersection(f, q, v[k])
        k += 1
        v[k] = q
        z[k] = s
        z[k + 1] = INF

    k = 0
    for q in range(n):
        while z[k + 1] < q:
            k += 1
        d[q] = (q - v[k]) * (q - v[k]) + f[v[k]]


def edt(grid: np.ndarray, workspace: DistanceTransformWorkspace | None = None) -> None:
    """2D Euclidean distance transform, in place.

    The column pass leaves squared distances in the grid, which the row pass
    consumes as its cost function; the row pass writes the square root, so
    the grid ends up holding true Euclidean distances to the nearest zero
    cost pixel.

    Args:
        grid: Float 2D array of seed costs, shape (height, width)
        workspace: Scratch buffers; a fresh one is allocated when omitted

    Raises:
        GridShapeError: If the workspace is shorter than a grid side
    """
    height, width = grid.shape
    if workspace is None:
        workspace = DistanceTransformWorkspace(max(width, height))
    elif workspace.size < max(width, height):
        raise GridShapeError(
            f"Workspace of size {workspace.size} cannot transform a "
            f"{width}x{height} grid"
        )

    f, d, v, z = workspace.f, workspace.d, workspace.v, workspace.z

    for x in range(width):
        f[:height] = grid[:, x].tolist()
        edt1d(f, d, v, z, height)
        grid[:, x] = d[:height]

    for y in range(height):
        f[:width] = grid[y, :].tolist()
        edt1d(f, d, v, z, width)
        grid[y, :] = np.sqrt(d[:width])
