"""Threaded procedural island terrain meshing."""

from .config import (
    ChunkConfig,
    DecorationConfig,
    GenerationConfig,
    SamplerTuning,
    SchedulerConfig,
    WorldConfig,
    find_config,
    list_configs,
    load_config,
)
from .exceptions import FieldShapeError, GenerationError, InvalidJobError, JobStateError
from .rng import SeededRandom
from .types import ChunkRequest, IslandParams, Region, TerrainPreset
from .terrain import MeshBuffer, sample_density
from .jobs import ChunkResult, Job, JobScheduler, WorkerExecutor, chunk_job, run_chunk_job
from .world import Island, TerrainStreamer, Viewer, WorldGrid

__all__ = [
    # Config
    "GenerationConfig",
    "WorldConfig",
    "ChunkConfig",
    "SchedulerConfig",
    "SamplerTuning",
    "DecorationConfig",
    "load_config",
    "find_config",
    "list_configs",
    # Errors
    "GenerationError",
    "InvalidJobError",
    "JobStateError",
    "FieldShapeError",
    # Types
    "ChunkRequest",
    "IslandParams",
    "Region",
    "TerrainPreset",
    "SeededRandom",
    # Terrain
    "MeshBuffer",
    "sample_density",
    # Jobs
    "ChunkResult",
    "Job",
    "JobScheduler",
    "WorkerExecutor",
    "chunk_job",
    "run_chunk_job",
    # World
    "Island",
    "TerrainStreamer",
    "Viewer",
    "WorldGrid",
]
