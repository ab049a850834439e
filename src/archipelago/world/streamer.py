"""Top-level terrain streaming context.

``TerrainStreamer`` owns the job scheduler, the world grid and the live
islands. The host application creates one, moves ``viewer`` around and
calls ``update()`` once per frame from a single thread.
"""

import time
from collections.abc import Callable

import structlog

from ..config import GenerationConfig
from ..jobs.scheduler import JobScheduler
from ..rng import SeededRandom
from ..types import IslandParams, Region, TerrainPreset, Vec3
from .chunk import MeshSink, Viewer
from .decoration import DecorationPlanner, SurfaceQuery
from .grid import WorldCell, WorldGrid
from .island import Island, plan_island

logger = structlog.get_logger()


class TerrainStreamer:
    """Generates islands around a moving viewer.

    Args:
        config: Generation configuration.
        viewer: Viewer to prioritize around; a new one at the origin if omitted.
        mesh_sink: Render collaborator for finished chunk meshes.
        is_clear: Host scene query for decoration sites; decoration is
            skipped when omitted.
        scheduler: Scheduler to submit to; one is built from the config if omitted.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        config: GenerationConfig,
        viewer: Viewer | None = None,
        mesh_sink: MeshSink | None = None,
        is_clear: SurfaceQuery | None = None,
        scheduler: JobScheduler | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.viewer = viewer or Viewer()
        self.rng = SeededRandom(config.world.seed)
        self.scheduler = scheduler or JobScheduler(max_workers=config.scheduler.max_workers)
        self.grid = WorldGrid(config, self.rng)
        self.islands: list[Island] = []
        self._mesh_sink = mesh_sink
        self._decorator = (
            DecorationPlanner(self.rng, config.decoration, is_clear) if is_clear is not None else None
        )
        self._clock = clock
        self._last_reprioritize = clock()
        self._current_cell: WorldCell | None = None

    def add_island(
        self, center: Vec3, region: Region = Region.GREEN, preset: TerrainPreset | None = None
    ) -> Island:
        """Plan an island at ``center`` and start generating it."""
        return self._spawn(plan_island(center, region, self.rng, self.config, preset), region)

    def update(self) -> None:
        """Advance one frame: schedule, follow the viewer, apply finished chunks."""
        self.scheduler.tick()

        now = self._clock()
        if now - self._last_reprioritize >= self.config.scheduler.reprioritize_interval_s:
            self.scheduler.reprioritize()
            self._last_reprioritize = now

        self._follow_viewer()

        for island in self.islands:
            island.update()

    def shutdown(self, timeout: float | None = None) -> None:
        for island in self.islands:
            if not island.is_done:
                island.discard()
        self.scheduler.shutdown(timeout)

    @property
    def is_idle(self) -> bool:
        """True when every island is fully generated."""
        return all(island.is_done for island in self.islands)

    def _follow_viewer(self) -> None:
        position = self.viewer.position
        if self._current_cell is not None and self.grid.find(position) is self._current_cell:
            return

        cell, created = self.grid.load(position)
        if cell is None:
            return
        self._current_cell = cell
        new_cells = [cell] if created else []
        new_cells.extend(self.grid.load_neighbors(cell))
        for new_cell in new_cells:
            if new_cell.island is not None:
                self._spawn(new_cell.island, new_cell.zone)
        logger.debug("viewer_cell_changed", cell=cell.origin, new_cells=len(new_cells))

    def _spawn(self, params: IslandParams, region: Region) -> Island:
        island = Island(
            params,
            region,
            self.scheduler,
            self.viewer,
            self.config,
            mesh_sink=self._mesh_sink,
            decorator=self._decorator,
        )
        self.islands.append(island)
        return island
