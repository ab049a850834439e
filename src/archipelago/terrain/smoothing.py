"""Field smoothing and normal estimation.

The raw field is averaged over a 3x3x3 box. Samples beyond the chunk are
not padded with zeros: they are re-sampled at their world positions, so a
chunk's smoothed border matches what its neighbour computes for the same
points and no seam appears between independently generated chunks.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..types import ChunkRequest
from .field import ScalarField, local_grid
from .sampler import sample_density_field

_BOX = np.ones((3, 3, 3), dtype=np.float64)


@dataclass
class SmoothedField:
    """Smoothed densities and outward surface normals of one chunk."""

    values: NDArray[np.float64]
    normals: NDArray[np.float64]


def pad_field(field: ScalarField, request: ChunkRequest, margin: int = 2) -> NDArray[np.float64]:
    """Surround a field with ``margin`` re-sampled layers on every side.

    Samples below the chunk belong to the lower half of the island and
    samples above it to the upper half; the rest keep the chunk's own flag.

    Args:
        field: Raw field of the chunk.
        request: Descriptor the field was sampled from.
        margin: Number of layers to add.

    Returns:
        Array of shape ``field.shape + 2 * margin`` whose interior is
        ``field.values``.
    """
    w, h, l = field.shape
    padded_shape = (w + 2 * margin, h + 2 * margin, l + 2 * margin)
    gx, gy, gz = local_grid(-margin, padded_shape)

    inner = (slice(margin, -margin),) * 3
    padded = np.empty(padded_shape, dtype=np.float64)
    padded[inner] = field.values

    ring = np.ones(padded_shape, dtype=bool)
    ring[inner] = False
    upper = np.where(gy < 0, False, np.where(gy >= h, True, request.upper))

    ox, oy, oz = request.origin
    padded[ring] = sample_density_field(
        ox + gx[ring], oy + gy[ring], oz + gz[ring], request.island, upper[ring], request.tuning
    )
    return padded


def estimate_normals(extended: NDArray[np.float64]) -> NDArray[np.float64]:
    """Unit normals from central differences of a field padded by one sample.

    Density grows into solid ground, so the gradient is flipped to point out
    of the surface. Flat regions get a zero normal.

    Args:
        extended: Smoothed field with one extra layer on every side.

    Returns:
        Array of shape ``extended.shape - 2`` plus a trailing axis of 3.
    """
    gradient = np.stack(
        [
            extended[2:, 1:-1, 1:-1] - extended[:-2, 1:-1, 1:-1],
            extended[1:-1, 2:, 1:-1] - extended[1:-1, :-2, 1:-1],
            extended[1:-1, 1:-1, 2:] - extended[1:-1, 1:-1, :-2],
        ],
        axis=-1,
    )
    length = np.linalg.norm(gradient, axis=-1, keepdims=True)
    return np.divide(-gradient, length, out=np.zeros_like(gradient), where=length > 0.0)


def smooth_field(field: ScalarField, request: ChunkRequest) -> SmoothedField:
    """Box-filter a chunk field and derive its normals.

    Args:
        field: Raw field of the chunk.
        request: Descriptor the field was sampled from.

    Returns:
        Smoothed values with the field's shape and one normal per sample.
    """
    padded = pad_field(field, request, margin=2)
    # correlate sums each window directly, so a sample's average does not
    # depend on where it sits in the array
    summed = ndimage.correlate(padded, _BOX, mode="nearest")
    extended = summed[1:-1, 1:-1, 1:-1] / 27.0
    return SmoothedField(values=extended[1:-1, 1:-1, 1:-1].copy(), normals=estimate_normals(extended))
