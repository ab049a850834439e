"""Raw density fields of chunk volumes."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..exceptions import FieldShapeError
from ..types import ChunkRequest, Vec3
from .sampler import sample_density_field


@dataclass
class ScalarField:
    """Dense density samples of one chunk, indexed ``[x, y, z]``.

    Sample ``[i, j, k]`` lies at ``origin + (i, j, k)`` in world space.
    """

    values: NDArray[np.float64]
    origin: Vec3

    def __post_init__(self) -> None:
        values = np.ascontiguousarray(self.values, dtype=np.float64)
        if values.ndim != 3 or min(values.shape) < 2:
            raise FieldShapeError(f"Field needs at least 2 samples per axis, got {values.shape}")
        self.values = values

    @property
    def shape(self) -> tuple[int, int, int]:
        return self.values.shape

    @property
    def contains_blocks(self) -> bool:
        return bool(np.any(self.values != 0.0))


def local_grid(lo: int, shape: tuple[int, int, int]) -> tuple[NDArray[np.int64], NDArray[np.int64], NDArray[np.int64]]:
    """Local integer coordinates of a box of samples starting at ``lo`` on every axis."""
    axes = [np.arange(lo, lo + n) for n in shape]
    return tuple(np.meshgrid(*axes, indexing="ij"))


def sample_chunk_field(request: ChunkRequest) -> ScalarField:
    """Sample the ``(W+1, H+1, W+1)`` raw field of a chunk."""
    shape = (request.width + 1, request.height + 1, request.width + 1)
    gx, gy, gz = local_grid(0, shape)
    ox, oy, oz = request.origin
    values = sample_density_field(
        ox + gx, oy + gy, oz + gz, request.island, request.upper, request.tuning
    )
    return ScalarField(values=values, origin=request.origin)
