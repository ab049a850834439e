"""World grid cells and island placement.

The world is cut into cubic cells of ``cell_size``. Each cell holds at most
one island; whether it does, where, and with which parameters is derived
from the cell origin and the world seed alone. Cells are created lazily
around the viewer and kept for the life of the grid.
"""

import math
from dataclasses import dataclass
from itertools import product

import structlog

from ..config import GenerationConfig
from ..rng import SeededRandom
from ..terrain.noise import GradientNoise3D
from ..types import IslandParams, Region, Vec3
from .island import plan_island

logger = structlog.get_logger()

_NEIGHBOR_OFFSETS = [offset for offset in product((-1, 0, 1), repeat=3) if offset != (0, 0, 0)]


@dataclass(frozen=True)
class WorldCell:
    """One grid cell and the island it holds, if any."""

    origin: Vec3
    zone: Region
    presence: float
    island: IslandParams | None = None

    @property
    def has_island(self) -> bool:
        return self.island is not None


class WorldGrid:
    """Lazily populated grid of world cells."""

    def __init__(self, config: GenerationConfig, rng: SeededRandom, noise: GradientNoise3D | None = None):
        self.config = config
        self.rng = rng
        self.size = config.world.cell_size
        self._noise = noise or GradientNoise3D(seed=0)
        self._cells: dict[Vec3, WorldCell] = {}

    @property
    def cells(self) -> list[WorldCell]:
        return list(self._cells.values())

    def __len__(self) -> int:
        return len(self._cells)

    def cell_origin(self, position: Vec3) -> Vec3:
        """Origin of the cell containing ``position``; cells are centred on their origin."""
        size = self.size
        return tuple(math.floor((p + size / 2.0) / size) * size for p in position)

    def in_bounds(self, origin: Vec3) -> bool:
        """Check that a cell origin lies within the layers that have a climate zone."""
        y = origin[1]
        return Region.LAVA * self.size <= y <= Region.ICY * self.size

    def find(self, position: Vec3) -> WorldCell | None:
        return self._cells.get(self.cell_origin(position))

    def load(self, position: Vec3) -> tuple[WorldCell | None, bool]:
        """Get or create the cell containing ``position``.

        Returns:
            The cell (None outside the zoned layers) and whether it was
            created by this call.
        """
        origin = self.cell_origin(position)
        cell = self._cells.get(origin)
        if cell is not None:
            return cell, False
        if not self.in_bounds(origin):
            return None, False
        cell = self._create(origin)
        self._cells[origin] = cell
        return cell, True

    def load_neighbors(self, cell: WorldCell) -> list[WorldCell]:
        """Create the up to 26 cells around ``cell``.

        Returns:
            The cells created by this call.
        """
        created = []
        ox, oy, oz = cell.origin
        for dx, dy, dz in _NEIGHBOR_OFFSETS:
            neighbor, is_new = self.load((ox + dx * self.size, oy + dy * self.size, oz + dz * self.size))
            if is_new:
                created.append(neighbor)
        return created

    def _create(self, origin: Vec3) -> WorldCell:
        x, y, z = origin
        zone = Region(math.floor(y / self.size))
        offset = self.rng.random_float((x + y) * 192.183, 0.0, 10000.0)
        presence = float(self._noise.sample(abs(x + offset), abs(y + offset), abs(z + offset)))
        if presence <= self.config.world.island_threshold:
            return WorldCell(origin=origin, zone=zone, presence=presence)

        world = self.config.world
        max_offset = (
            (self.size - world.island_size_max) / 2.0,
            (self.size - self.config.chunk.height * 2) / 2.0,
            (self.size - world.island_size_max) / 2.0,
        )
        center = (
            x + self.rng.random_float(presence * (presence + z) * 907.1234, 0.0, max_offset[0]),
            y + self.rng.random_float(presence * (presence + z) * 482.5764, 0.0, max_offset[1]),
            z + self.rng.random_float(presence * (presence + x) * 159.9824, 0.0, max_offset[2]),
        )
        island = plan_island(center, zone, self.rng, self.config)
        logger.debug("island_placed", cell=origin, zone=zone.name, preset=island.preset.label)
        return WorldCell(origin=origin, zone=zone, presence=presence, island=island)
