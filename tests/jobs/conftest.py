"""Fixtures for scheduler and worker tests."""

from collections.abc import Callable

import pytest

from archipelago.jobs.job import Job, chunk_job
from archipelago.types import ChunkRequest


class FakeWorker:
    """Worker stand-in that records assignments instead of running them."""

    def __init__(self, scheduler, name: str):
        self.scheduler = scheduler
        self.name = name
        self.jobs: list[Job] = []
        self.started = False
        self.stopped = False
        self.busy = False

    def start(self) -> None:
        self.started = True

    def assign(self, job: Job) -> bool:
        if self.busy:
            return False
        self.jobs.append(job)
        self.busy = True
        return True

    def stop(self) -> None:
        self.stopped = True

    def join(self, timeout: float | None = None) -> None:
        pass

    def finish(self) -> None:
        """Pretend the current job completed and ask for the next one."""
        self.busy = False
        self.scheduler.request_job(self)


@pytest.fixture
def fake_workers() -> list[FakeWorker]:
    return []


@pytest.fixture
def fake_factory(fake_workers: list[FakeWorker]) -> Callable[..., FakeWorker]:
    """Worker factory that keeps every worker it builds."""

    def factory(scheduler, name: str) -> FakeWorker:
        worker = FakeWorker(scheduler, name)
        fake_workers.append(worker)
        return worker

    return factory


@pytest.fixture
def make_job(empty_request: ChunkRequest) -> Callable[[float], Job]:
    """Factory for cheap valid jobs with a fixed priority."""

    def make(priority: float = 0.0) -> Job:
        return chunk_job(empty_request, lambda: priority)

    return make
