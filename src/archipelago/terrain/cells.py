"""Cell assembly from smoothed fields."""

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .polygonizer import CORNER_OFFSETS, Cell, Triangle, cube_index, polygonize
from .smoothing import SmoothedField

_OFFSETS = np.array(CORNER_OFFSETS, dtype=np.float64)


@dataclass
class CellGrid:
    """Corner samples of every cell of a chunk.

    ``values`` has shape ``(nx, ny, nz, 8)`` and ``normals`` shape
    ``(nx, ny, nz, 8, 3)``; corner order follows ``CORNER_OFFSETS``.
    Corner positions are implied by the cell's grid index.
    """

    values: NDArray[np.float64]
    normals: NDArray[np.float64]

    @property
    def shape(self) -> tuple[int, int, int]:
        return self.values.shape[:3]

    def __len__(self) -> int:
        nx, ny, nz = self.shape
        return nx * ny * nz

    def cell(self, x: int, y: int, z: int) -> Cell:
        return Cell(
            positions=_OFFSETS + (x, y, z),
            normals=self.normals[x, y, z],
            values=self.values[x, y, z],
        )

    def __iter__(self) -> Iterator[Cell]:
        for x, y, z in np.ndindex(*self.shape):
            yield self.cell(x, y, z)


def assemble_cells(smoothed: SmoothedField) -> CellGrid:
    """Gather the eight corners of every cell; negative densities clamp to zero."""
    values = smoothed.values
    normals = smoothed.normals
    nx, ny, nz = (n - 1 for n in values.shape)
    corner_values = np.stack(
        [values[ox:ox + nx, oy:oy + ny, oz:oz + nz] for ox, oy, oz in CORNER_OFFSETS], axis=-1
    )
    corner_normals = np.stack(
        [normals[ox:ox + nx, oy:oy + ny, oz:oz + nz] for ox, oy, oz in CORNER_OFFSETS], axis=-2
    )
    return CellGrid(values=np.maximum(corner_values, 0.0), normals=corner_normals)


def polygonize_cells(cells: CellGrid, iso_level: float) -> list[Triangle]:
    """Polygonize every cell that straddles the surface, in ``(x, y, z)`` order."""
    cases = cube_index(cells.values, iso_level)
    straddling = np.argwhere((cases != 0) & (cases != 255))
    triangles: list[Triangle] = []
    for x, y, z in straddling:
        polygonize(cells.cell(int(x), int(y), int(z)), iso_level, triangles)
    return triangles
