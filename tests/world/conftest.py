"""Fixtures for world tests."""

import pytest

from archipelago.jobs.job import Job


class InlineScheduler:
    """Scheduler stand-in that runs every job as soon as it is submitted."""

    def __init__(self):
        self.submitted: list[Job] = []

    def submit(self, job: Job | None) -> bool:
        if job is None or not job.is_valid():
            return False
        self.submitted.append(job)
        try:
            job.run()
        except Exception:
            # Recorded on the job; the chunk turns it into an empty chunk
            pass
        return True

    def discard(self, job: Job) -> bool:
        return False


class MeshRecorder:
    """Mesh sink that keeps every chunk it is handed."""

    def __init__(self):
        self.applied = []

    def apply_mesh(self, chunk, mesh) -> None:
        self.applied.append((chunk, mesh))


@pytest.fixture
def inline_scheduler() -> InlineScheduler:
    return InlineScheduler()


@pytest.fixture
def mesh_recorder() -> MeshRecorder:
    return MeshRecorder()
