"""Threaded job scheduling for chunk generation."""

from .chunk_job import ChunkResult, run_chunk_job
from .job import Job, JobKind, JobState, chunk_job
from .scheduler import JobScheduler
from .worker import WorkerExecutor

__all__ = [
    "ChunkResult",
    "Job",
    "JobKind",
    "JobScheduler",
    "JobState",
    "WorkerExecutor",
    "chunk_job",
    "run_chunk_job",
]
