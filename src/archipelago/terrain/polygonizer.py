"""Marching cubes polygonization of single cells.

The case tables are derived from cube topology when the module loads. For
every one of the 256 below/above corner patterns, the edges whose corners
disagree are linked face by face into closed loops, and each loop is fanned
into triangles. On faces where both diagonals disagree, the corners below
the iso level are cut off individually. Neighbouring cells share faces and
therefore agree on that choice, which keeps the surface watertight.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

# Unit cube corner offsets in polygonization order
CORNER_OFFSETS: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0),
    (0, 0, 1),
    (1, 0, 1),
    (1, 0, 0),
    (0, 1, 0),
    (0, 1, 1),
    (1, 1, 1),
    (1, 1, 0),
)

# Corner pairs of the twelve cube edges
EDGE_CORNERS: tuple[tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)

MAX_TRIANGLES = 5

_SNAP = 1e-5


@dataclass
class Cell:
    """Eight corner samples of one unit cube, in ``CORNER_OFFSETS`` order."""

    positions: NDArray[np.float64]  # (8, 3)
    normals: NDArray[np.float64]  # (8, 3)
    values: NDArray[np.float64]  # (8,)


@dataclass
class Triangle:
    """One output triangle with per-vertex normals."""

    positions: NDArray[np.float64]  # (3, 3)
    normals: NDArray[np.float64]  # (3, 3)


def _cube_faces() -> list[tuple[frozenset[int], tuple[int, ...]]]:
    faces = []
    for axis in range(3):
        for side in (0, 1):
            corners = frozenset(i for i, offset in enumerate(CORNER_OFFSETS) if offset[axis] == side)
            edges = tuple(
                e for e, (a, b) in enumerate(EDGE_CORNERS) if a in corners and b in corners
            )
            faces.append((corners, edges))
    return faces


_FACES = _cube_faces()


def _triangulate_case(case: int) -> tuple[int, tuple[tuple[int, int, int], ...]]:
    below = [bool(case >> i & 1) for i in range(8)]
    crossing = [e for e, (a, b) in enumerate(EDGE_CORNERS) if below[a] != below[b]]
    edge_mask = sum(1 << e for e in crossing)

    links: dict[int, list[int]] = {e: [] for e in crossing}
    for corners, edges in _FACES:
        face_crossing = [e for e in edges if e in links]
        if len(face_crossing) == 2:
            a, b = face_crossing
            links[a].append(b)
            links[b].append(a)
        elif len(face_crossing) == 4:
            for corner in sorted(corners):
                if below[corner]:
                    a, b = (e for e in edges if corner in EDGE_CORNERS[e])
                    links[a].append(b)
                    links[b].append(a)

    triangles = []
    visited: set[int] = set()
    for start in crossing:
        if start in visited:
            continue
        loop = [start]
        visited.add(start)
        previous, current = start, links[start][0]
        while current != start:
            loop.append(current)
            visited.add(current)
            a, b = links[current]
            previous, current = current, (b if a == previous else a)
        for i in range(1, len(loop) - 1):
            triangles.append((loop[0], loop[i], loop[i + 1]))
    return edge_mask, tuple(triangles)


def _build_tables() -> tuple[tuple[int, ...], tuple[tuple[tuple[int, int, int], ...], ...]]:
    cases = [_triangulate_case(case) for case in range(256)]
    return tuple(mask for mask, _ in cases), tuple(tris for _, tris in cases)


# EDGE_TABLE[case]: bit e set when edge e crosses the surface
# TRIANGLE_TABLE[case]: triangles as triples of edge indices
EDGE_TABLE, TRIANGLE_TABLE = _build_tables()

_CORNER_WEIGHTS = 1 << np.arange(8)


def cube_index(values: NDArray[np.float64], iso_level: float) -> NDArray[np.int64]:
    """Case index of one or many cells; bit ``i`` is set when corner ``i`` is below the iso level.

    Args:
        values: Corner values with a trailing axis of 8.
        iso_level: Density of the surface.
    """
    return ((values < iso_level) * _CORNER_WEIGHTS).sum(axis=-1)


def _interpolate(
    iso_level: float,
    p1: NDArray[np.float64],
    p2: NDArray[np.float64],
    n1: NDArray[np.float64],
    n2: NDArray[np.float64],
    v1: float,
    v2: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    if abs(iso_level - v1) < _SNAP:
        return p1, n1
    if abs(iso_level - v2) < _SNAP:
        return p2, n2
    if abs(v1 - v2) < _SNAP:
        return p1, n1
    mu = (iso_level - v1) / (v2 - v1)
    return p1 + mu * (p2 - p1), n1 + mu * (n2 - n1)


def _unit(vectors: NDArray[np.float64]) -> NDArray[np.float64]:
    length = np.linalg.norm(vectors, axis=-1, keepdims=True)
    return np.divide(vectors, length, out=np.zeros_like(vectors), where=length > 0.0)


def polygonize(cell: Cell, iso_level: float, triangles: list[Triangle] | None = None) -> list[Triangle]:
    """Extract the iso surface triangles of one cell.

    Triangles are wound counter-clockwise when seen from the side their
    interpolated normals point to.

    Args:
        cell: Corner samples.
        iso_level: Density of the surface.
        triangles: Optional list to append to.

    Returns:
        The list the triangles were appended to; at most five are added.
    """
    if triangles is None:
        triangles = []
    case = int(cube_index(cell.values, iso_level))
    mask = EDGE_TABLE[case]
    if mask == 0:
        return triangles

    points: dict[int, tuple[NDArray[np.float64], NDArray[np.float64]]] = {}
    for edge, (a, b) in enumerate(EDGE_CORNERS):
        if mask & (1 << edge):
            points[edge] = _interpolate(
                iso_level,
                cell.positions[a],
                cell.positions[b],
                cell.normals[a],
                cell.normals[b],
                float(cell.values[a]),
                float(cell.values[b]),
            )

    for e0, e1, e2 in TRIANGLE_TABLE[case]:
        positions = np.array([points[e0][0], points[e1][0], points[e2][0]])
        normals = _unit(np.array([points[e0][1], points[e1][1], points[e2][1]]))
        face = np.cross(positions[1] - positions[0], positions[2] - positions[0])
        if np.dot(face, normals.sum(axis=0)) < 0.0:
            positions = positions[[0, 2, 1]]
            normals = normals[[0, 2, 1]]
        triangles.append(Triangle(positions=positions, normals=normals))
    return triangles
