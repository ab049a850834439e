"""World entities: chunks, islands, the world grid and the streaming context."""

from .chunk import Chunk, ChunkState, MeshSink, Viewer, distance_priority
from .decoration import DecorationPlanner, DecorationSite
from .grid import WorldCell, WorldGrid
from .island import Island, chunk_layout, plan_island
from .streamer import TerrainStreamer

__all__ = [
    "Chunk",
    "ChunkState",
    "DecorationPlanner",
    "DecorationSite",
    "Island",
    "MeshSink",
    "TerrainStreamer",
    "Viewer",
    "WorldCell",
    "WorldGrid",
    "chunk_layout",
    "distance_priority",
    "plan_island",
]
