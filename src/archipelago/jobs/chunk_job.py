"""The chunk generation chain: sample, smooth, polygonize."""

import time
from dataclasses import dataclass

import structlog

from ..exceptions import InvalidJobError
from ..terrain.cells import assemble_cells, polygonize_cells
from ..terrain.field import sample_chunk_field
from ..terrain.mesh import MeshBuffer
from ..terrain.smoothing import smooth_field
from ..types import ChunkRequest

logger = structlog.get_logger()


@dataclass(frozen=True)
class ChunkResult:
    """Output of a chunk job.

    A result without a mesh is the empty marker: the chunk holds no surface
    and its owner should delete it rather than render it.
    """

    chunk_id: str
    mesh: MeshBuffer | None = None

    @property
    def contains_blocks(self) -> bool:
        return self.mesh is not None and not self.mesh.is_empty


def run_chunk_job(request: ChunkRequest) -> ChunkResult:
    """Generate the mesh of one chunk.

    Smoothing and polygonization are skipped when every raw sample is air.

    Args:
        request: Chunk descriptor.

    Returns:
        The chunk mesh, or the empty marker.

    Raises:
        InvalidJobError: If the descriptor is missing or degenerate.
    """
    if not isinstance(request, ChunkRequest) or not request.is_valid():
        raise InvalidJobError(f"Invalid chunk request: {request!r}")

    start = time.perf_counter()
    field = sample_chunk_field(request)
    if not field.contains_blocks:
        logger.debug("chunk_empty", chunk_id=request.chunk_id, stage="sample")
        return ChunkResult(chunk_id=request.chunk_id)

    smoothed = smooth_field(field, request)
    cells = assemble_cells(smoothed)
    triangles = polygonize_cells(cells, request.iso_level)
    if not triangles:
        logger.debug("chunk_empty", chunk_id=request.chunk_id, stage="polygonize")
        return ChunkResult(chunk_id=request.chunk_id)

    mesh = MeshBuffer.from_triangles(triangles)
    logger.debug(
        "chunk_generated",
        chunk_id=request.chunk_id,
        triangles=mesh.triangle_count,
        duration_ms=round((time.perf_counter() - start) * 1000, 1),
    )
    return ChunkResult(chunk_id=request.chunk_id, mesh=mesh)
