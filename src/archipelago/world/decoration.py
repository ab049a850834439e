"""Decoration site selection on chunk meshes.

Sites are drawn from mesh vertices with the world's seeded random source,
so the same chunk is decorated the same way on every run. Whether a point
is unobstructed is up to the host scene, which supplies a predicate.
"""

import math
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from itertools import product

from ..config import DecorationConfig
from ..rng import SeededRandom
from ..terrain.mesh import MeshBuffer
from ..types import Vec3

# Host scene query: True when a decoration may stand at the point
SurfaceQuery = Callable[[Vec3], bool]

Bucket = tuple[int, int, int]

_NEARBY = list(product((-1, 0, 1), repeat=3))


def _always_clear(point: Vec3) -> bool:
    return True


@dataclass(frozen=True)
class DecorationSite:
    position: Vec3
    variant: int
    rotation: float


class DecorationPlanner:
    """Picks decoration sites for chunks, keeping them apart across chunks.

    Placed sites are bucketed on a grid as coarse as the minimum separation,
    so a separation check only looks at the 27 buckets around the point
    however many sites the world already holds.
    """

    def __init__(
        self,
        rng: SeededRandom,
        config: DecorationConfig | None = None,
        is_clear: SurfaceQuery = _always_clear,
    ):
        self.rng = rng
        self.config = config or DecorationConfig()
        self.is_clear = is_clear
        self.sites: list[DecorationSite] = []
        self._buckets: defaultdict[Bucket, list[DecorationSite]] = defaultdict(list)

    def _bucket(self, point: Vec3) -> Bucket:
        size = self.config.min_separation
        x, y, z = point
        return math.floor(x / size), math.floor(y / size), math.floor(z / size)

    def _nearby(self, point: Vec3) -> list[DecorationSite]:
        bx, by, bz = self._bucket(point)
        nearby = []
        for dx, dy, dz in _NEARBY:
            nearby.extend(self._buckets.get((bx + dx, by + dy, bz + dz), ()))
        return nearby

    def _separated(self, point: Vec3) -> bool:
        limit = self.config.min_separation
        return all(math.dist(point, site.position) >= limit for site in self._nearby(point))

    def _place(self, site: DecorationSite) -> None:
        self.sites.append(site)
        self._buckets[self._bucket(site.position)].append(site)

    def _site(self, point: Vec3) -> DecorationSite:
        x, y, z = point
        seed = x - z + y
        return DecorationSite(
            position=point,
            variant=self.rng.random_int(round(seed * 197.5902), 0, self.config.variants),
            rotation=self.rng.random_float(seed * 192.012, 0.0, 360.0),
        )

    def decorate(self, origin: Vec3, mesh: MeshBuffer, budget: int) -> list[DecorationSite]:
        """Choose up to ``budget`` sites on a chunk mesh.

        The budget is capped at one site per ten vertices and at most ten
        draws per site are attempted. A drawn vertex is accepted when it
        faces up, the host scene reports it clear, and it keeps the minimum
        separation from every site placed so far.

        Args:
            origin: World position of the chunk; mesh vertices are local to it.
            mesh: Chunk mesh.
            budget: Wanted number of sites.

        Returns:
            The sites placed for this chunk.
        """
        vertex_count = mesh.vertex_count
        remaining = min(vertex_count // 10, budget)
        attempts = remaining * 10
        placed: list[DecorationSite] = []
        ox, oy, oz = origin

        while remaining > 0:
            attempts -= 1
            if attempts <= 0:
                break
            index = self.rng.random_int(round(ox - oz + attempts * 1234 - remaining * 912), 0, vertex_count)
            if mesh.normals[index][1] <= self.config.facing_up_threshold:
                continue
            vx, vy, vz = (float(v) for v in mesh.vertices[index])
            point = (vx + ox, vy + oy, vz + oz)
            if not self._separated(point) or not self.is_clear(point):
                continue
            site = self._site(point)
            self._place(site)
            placed.append(site)
            remaining -= 1

        return placed
