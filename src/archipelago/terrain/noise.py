"""Coherent 3D noise for density sampling.

Gradient noise evaluated on whole arrays of positions at once. Lattice
gradients come from an integer hash of the cell coordinates, so there is no
permutation table to build and no state to share between threads.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Edge midpoints of a cube: the classic improved-noise gradient set
_GRADIENTS = np.array(
    [
        [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
        [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
        [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
    ],
    dtype=np.float64,
)


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    # smootherstep
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: NDArray[np.float64], b: NDArray[np.float64], t: NDArray[np.float64]) -> NDArray[np.float64]:
    return a + t * (b - a)


class GradientNoise3D:
    """Vectorized 3D gradient noise in roughly ``[-1, 1]``.

    Deterministic for a given seed. The value at integer lattice points is
    zero, as with any gradient noise.
    """

    def __init__(self, seed: int = 0) -> None:
        self.seed = int(seed)
        self._seed_bits = np.uint32(self.seed & 0xFFFFFFFF)

    def _hash(self, xi: NDArray[np.int64], yi: NDArray[np.int64], zi: NDArray[np.int64]) -> NDArray[np.uint32]:
        h = (
            (xi.astype(np.uint32) * np.uint32(374761393))
            ^ (yi.astype(np.uint32) * np.uint32(668265263))
            ^ (zi.astype(np.uint32) * np.uint32(1440662683))
            ^ self._seed_bits
        )
        h ^= h >> np.uint32(13)
        h *= np.uint32(1274126177)
        h ^= h >> np.uint32(16)
        return h

    def _corner(
        self,
        xi: NDArray[np.int64],
        yi: NDArray[np.int64],
        zi: NDArray[np.int64],
        fx: NDArray[np.float64],
        fy: NDArray[np.float64],
        fz: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        g = _GRADIENTS[self._hash(xi, yi, zi) % np.uint32(len(_GRADIENTS))]
        return g[:, 0] * fx + g[:, 1] * fy + g[:, 2] * fz

    def sample(self, x: ArrayLike, y: ArrayLike, z: ArrayLike) -> NDArray[np.float64]:
        """Evaluate the noise at broadcast-compatible coordinate arrays.

        Args:
            x: X coordinates.
            y: Y coordinates.
            z: Z coordinates.

        Returns:
            Noise values with the broadcast shape of the inputs.
        """
        x, y, z = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64),
            np.asarray(y, dtype=np.float64),
            np.asarray(z, dtype=np.float64),
        )
        shape = x.shape
        # Work on flat 1D arrays so uint32 arithmetic never hits scalar overflow
        x, y, z = (np.atleast_1d(a).ravel() for a in (x, y, z))

        x0, y0, z0 = np.floor(x), np.floor(y), np.floor(z)
        fx, fy, fz = x - x0, y - y0, z - z0
        xi, yi, zi = x0.astype(np.int64), y0.astype(np.int64), z0.astype(np.int64)

        n000 = self._corner(xi, yi, zi, fx, fy, fz)
        n100 = self._corner(xi + 1, yi, zi, fx - 1.0, fy, fz)
        n010 = self._corner(xi, yi + 1, zi, fx, fy - 1.0, fz)
        n110 = self._corner(xi + 1, yi + 1, zi, fx - 1.0, fy - 1.0, fz)
        n001 = self._corner(xi, yi, zi + 1, fx, fy, fz - 1.0)
        n101 = self._corner(xi + 1, yi, zi + 1, fx - 1.0, fy, fz - 1.0)
        n011 = self._corner(xi, yi + 1, zi + 1, fx, fy - 1.0, fz - 1.0)
        n111 = self._corner(xi + 1, yi + 1, zi + 1, fx - 1.0, fy - 1.0, fz - 1.0)

        u, v, w = _fade(fx), _fade(fy), _fade(fz)
        nx00 = _lerp(n000, n100, u)
        nx10 = _lerp(n010, n110, u)
        nx01 = _lerp(n001, n101, u)
        nx11 = _lerp(n011, n111, u)
        nxy0 = _lerp(nx00, nx10, v)
        nxy1 = _lerp(nx01, nx11, v)
        return _lerp(nxy0, nxy1, w).reshape(shape)

    def value(self, x: float, y: float, z: float) -> float:
        """Evaluate the noise at a single point."""
        return float(self.sample(x, y, z))
