"""Flat triangle mesh buffers handed to the render collaborator."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..exceptions import FieldShapeError
from .polygonizer import Triangle


@dataclass(frozen=True, eq=False)
class MeshBuffer:
    """Vertex positions, parallel normals and a flat triangle index list.

    Arrays are read-only once the buffer exists; whoever holds the buffer
    owns it outright.
    """

    vertices: NDArray[np.float32]
    normals: NDArray[np.float32]
    indices: NDArray[np.uint32]

    def __post_init__(self) -> None:
        vertices = np.array(self.vertices, dtype=np.float32).reshape(-1, 3)
        normals = np.array(self.normals, dtype=np.float32).reshape(-1, 3)
        indices = np.array(self.indices, dtype=np.uint32).ravel()
        if normals.shape != vertices.shape:
            raise FieldShapeError(
                f"{len(normals)} normals for {len(vertices)} vertices"
            )
        if len(indices) % 3:
            raise FieldShapeError(f"Index count {len(indices)} is not a multiple of 3")
        if len(indices) and int(indices.max()) >= len(vertices):
            raise FieldShapeError("Index out of range of the vertex list")
        for array in (vertices, normals, indices):
            array.setflags(write=False)
        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "normals", normals)
        object.__setattr__(self, "indices", indices)

    @classmethod
    def empty(cls) -> "MeshBuffer":
        return cls(
            vertices=np.empty((0, 3), dtype=np.float32),
            normals=np.empty((0, 3), dtype=np.float32),
            indices=np.empty(0, dtype=np.uint32),
        )

    @classmethod
    def from_triangles(cls, triangles: list[Triangle]) -> "MeshBuffer":
        """Concatenate triangles into unshared vertices with sequential indices."""
        if not triangles:
            return cls.empty()
        vertices = np.concatenate([t.positions for t in triangles])
        normals = np.concatenate([t.normals for t in triangles])
        return cls(
            vertices=vertices,
            normals=normals,
            indices=np.arange(len(vertices), dtype=np.uint32),
        )

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def is_empty(self) -> bool:
        return self.triangle_count == 0

    def bounds(self) -> tuple[NDArray[np.float32], NDArray[np.float32]]:
        """Recompute the axis aligned bounding box as ``(min, max)`` corners."""
        if not len(self.vertices):
            zero = np.zeros(3, dtype=np.float32)
            return zero, zero.copy()
        return self.vertices.min(axis=0), self.vertices.max(axis=0)
