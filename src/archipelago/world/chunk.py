"""Chunk entities that own a generation job and its result."""

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

import structlog

from ..jobs.job import Job, PrioritySource, chunk_job
from ..terrain.mesh import MeshBuffer
from ..types import ChunkRequest, Vec3

logger = structlog.get_logger()

MAX_PRIORITY = 100000.0


@dataclass
class Viewer:
    """The point of view that generation is prioritized around."""

    position: Vec3 = (0.0, 0.0, 0.0)

    def distance_to(self, point: Vec3) -> float:
        return math.dist(self.position, point)


def distance_priority(viewer: Viewer, point: Vec3, cap: float = MAX_PRIORITY) -> PrioritySource:
    """Live priority accessor: distance from the viewer to ``point``, capped."""

    def priority() -> float:
        return min(cap, viewer.distance_to(point))

    return priority


class ChunkState(Enum):
    PENDING = auto()
    CREATED = auto()
    EMPTY = auto()


class MeshSink(Protocol):
    """Render collaborator receiving finished chunk meshes.

    Implementations turn the buffer into drawable and collidable geometry,
    recomputing bounds and optimizing it for drawing.
    """

    def apply_mesh(self, chunk: "Chunk", mesh: MeshBuffer) -> None: ...


@dataclass(eq=False)
class Chunk:
    """One bounded volume of an island and the job that builds it."""

    request: ChunkRequest
    job: Job | None = None
    state: ChunkState = ChunkState.PENDING
    mesh: MeshBuffer | None = None
    decorations: list = field(default_factory=list)

    @classmethod
    def create(cls, request: ChunkRequest, priority_source: PrioritySource) -> "Chunk":
        return cls(request=request, job=chunk_job(request, priority_source))

    @property
    def chunk_id(self) -> str:
        return self.request.chunk_id

    @property
    def origin(self) -> Vec3:
        return self.request.origin

    @property
    def upper(self) -> bool:
        return self.request.upper

    @property
    def to_delete(self) -> bool:
        return self.state is ChunkState.EMPTY

    def reject(self) -> None:
        """Mark a chunk whose job was refused by the scheduler as empty."""
        logger.debug("chunk_rejected", chunk_id=self.chunk_id)
        self.job = None
        self.state = ChunkState.EMPTY

    def update(self) -> bool:
        """Consume the job result once it is done.

        Returns:
            True if the chunk left the pending state during this call.
        """
        if self.state is not ChunkState.PENDING or self.job is None or not self.job.is_done:
            return False

        job, self.job = self.job, None
        if job.error is not None:
            logger.warning("chunk_failed", chunk_id=self.chunk_id, error=str(job.error))
            self.state = ChunkState.EMPTY
            return True

        result = job.output
        if result.contains_blocks:
            self.mesh = result.mesh
            self.state = ChunkState.CREATED
        else:
            self.state = ChunkState.EMPTY
        return True
