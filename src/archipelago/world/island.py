"""Islands: seeded parameters, chunk layout and generation lifecycle."""

import math

import structlog

from ..config import GenerationConfig
from ..jobs.scheduler import JobScheduler
from ..rng import SeededRandom
from ..terrain.presets import choose_terrain
from ..types import ChunkRequest, IslandParams, NoiseOffsets, Region, TerrainPreset, Vec3
from .chunk import Chunk, ChunkState, MeshSink, Viewer, distance_priority
from .decoration import DecorationPlanner

logger = structlog.get_logger()


def plan_island(
    center: Vec3,
    region: Region,
    rng: SeededRandom,
    config: GenerationConfig,
    preset: TerrainPreset | None = None,
) -> IslandParams:
    """Derive the parameters of the island centred at ``center``.

    Every value is drawn from ``rng`` with seeds built from the centre, so
    an island is fully determined by its position and the world seed.

    Args:
        center: Island centre in world space.
        region: Climate zone of the island.
        rng: World random source.
        config: Generation configuration.
        preset: Force a preset instead of drawing one.

    Returns:
        The island parameters.
    """
    x, y, z = center
    if preset is None:
        preset = choose_terrain(region, rng.random_int(round(x + y - z), 0, 1000))

    offsets: NoiseOffsets = tuple(
        (
            rng.random_float(i * 20.193 + z * 97.105471, 0.0, 10000.0),
            rng.random_float(i * 27.942 + x * 124.01846, 0.0, 10000.0),
            rng.random_float(i * 13.581 + x * 114.07205, 0.0, 10000.0),
        )
        for i in range(4)
    )
    width = float(
        round(
            rng.random_float(
                offsets[0][0] - offsets[1][1] + offsets[3][2],
                config.world.island_size_min,
                config.world.island_size_max,
            )
        )
    )
    size = (width, float(config.chunk.height * 2), width)
    return IslandParams(preset=preset, center=center, size=size, noise_offsets=offsets)


def chunk_layout(params: IslandParams, width: int, height: int) -> list[tuple[Vec3, bool]]:
    """Chunk origins covering an island, upper layer first.

    The upper layer sits at the island centre height and the lower layer
    one chunk below it. Horizontally the chunks span from one chunk width
    before ``-size/2`` to past ``size/2``, aligned to a chunk grid anchored
    at the centre.

    Returns:
        ``(origin, upper)`` pairs.
    """
    cx, cy, cz = params.center
    half = params.size[0] / 2.0
    first = math.floor(-half / width) - 1
    steps = range(first, first + math.ceil(2.0 * half / width + 2.0))
    layout = []
    for layer, upper in ((0, True), (1, False)):
        y = float(-height * layer)
        for ix in steps:
            for iz in steps:
                layout.append(((ix * width + cx, y + cy, iz * width + cz), upper))
    return layout


class Island:
    """A cluster of chunks sharing one preset, centre and size.

    Creating an island submits one job per chunk. ``update()`` is called
    once per cycle from the coordinating thread: it applies finished
    meshes, places decorations and deletes chunks that came back empty.
    """

    def __init__(
        self,
        params: IslandParams,
        region: Region,
        scheduler: JobScheduler,
        viewer: Viewer,
        config: GenerationConfig,
        mesh_sink: MeshSink | None = None,
        decorator: DecorationPlanner | None = None,
    ):
        self.params = params
        self.region = region
        self.name = params.name
        self._scheduler = scheduler
        self._mesh_sink = mesh_sink
        self._decorator = decorator
        self.chunks: list[Chunk] = []
        self.num_chunks = 0
        self.num_chunks_finished = 0
        self.is_done = False

        chunk_config = config.chunk
        cap = config.scheduler.max_priority
        for index, (origin, upper) in enumerate(chunk_layout(params, chunk_config.width, chunk_config.height)):
            request = ChunkRequest(
                chunk_id=f"{self.name}#{index}",
                origin=origin,
                width=chunk_config.width,
                height=chunk_config.height,
                upper=upper,
                island=params,
                iso_level=chunk_config.iso_level,
                tuning=config.sampler,
            )
            chunk = Chunk.create(request, distance_priority(viewer, origin, cap))
            self.chunks.append(chunk)
            if not scheduler.submit(chunk.job):
                chunk.reject()

        logger.info(
            "island_created",
            island=self.name,
            region=region.name,
            size=params.size[0],
            chunks=len(self.chunks),
        )

    @property
    def preset(self) -> TerrainPreset:
        return self.params.preset

    @property
    def center(self) -> Vec3:
        return self.params.center

    def update(self) -> None:
        """Poll chunk jobs and apply whatever finished."""
        if self.is_done:
            return

        for chunk in self.chunks:
            if chunk.update() and chunk.state is ChunkState.CREATED:
                self._apply(chunk)

        empty = [chunk for chunk in self.chunks if chunk.to_delete]
        if empty:
            self.chunks = [chunk for chunk in self.chunks if not chunk.to_delete]
            logger.debug("chunks_deleted", island=self.name, count=len(empty))

        self.num_chunks = len(self.chunks)
        self.num_chunks_finished = sum(1 for chunk in self.chunks if chunk.state is ChunkState.CREATED)

        if self.num_chunks == self.num_chunks_finished:
            self.is_done = True
            logger.info("island_done", island=self.name, chunks=self.num_chunks)

    def discard(self) -> None:
        """Withdraw every chunk job that has not been dispatched yet."""
        withdrawn = sum(
            1 for chunk in self.chunks if chunk.job is not None and self._scheduler.discard(chunk.job)
        )
        logger.debug("island_discarded", island=self.name, withdrawn=withdrawn)

    def _apply(self, chunk: Chunk) -> None:
        if self._mesh_sink is not None:
            self._mesh_sink.apply_mesh(chunk, chunk.mesh)
        budget = self.preset.decoration_budget
        if self._decorator is not None and budget > 0:
            chunk.decorations = self._decorator.decorate(chunk.origin, chunk.mesh, budget)
