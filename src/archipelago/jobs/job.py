"""Schedulable units of work.

A ``Job`` is a tagged variant: its ``kind`` selects the function that runs
its request. Chunk generation is the only kind today; new kinds add a tag
and a dispatch arm rather than a subclass.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import count
from typing import Any

from ..exceptions import JobStateError
from ..types import ChunkRequest
from .chunk_job import run_chunk_job

PrioritySource = Callable[[], float]

_job_ids = count(1)


class JobKind(Enum):
    CHUNK = auto()


class JobState(Enum):
    PENDING = auto()
    RUNNING = auto()
    DONE = auto()


def _no_priority() -> float:
    return 0.0


@dataclass(eq=False)
class Job:
    """One unit of deferred work.

    The job runs at most once. Its output is written exactly once, by the
    worker that ran it, before the done event is set; readers only look at
    it afterwards.
    """

    kind: JobKind
    request: Any
    priority_source: PrioritySource = _no_priority
    job_id: int = field(default_factory=lambda: next(_job_ids))

    _state: JobState = field(default=JobState.PENDING, init=False)
    _output: Any = field(default=None, init=False)
    _error: BaseException | None = field(default=None, init=False)
    _done: threading.Event = field(default_factory=threading.Event, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    @property
    def priority(self) -> float:
        """Current priority; lower runs sooner. Read live from the source."""
        return float(self.priority_source())

    @property
    def state(self) -> JobState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return self._state is JobState.PENDING

    @property
    def is_done(self) -> bool:
        return self._done.is_set()

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def output(self) -> Any:
        """Result of the job, None if it failed.

        Raises:
            JobStateError: If the job has not finished.
        """
        if not self._done.is_set():
            raise JobStateError(f"Job {self.job_id} is not done")
        return self._output

    def is_valid(self) -> bool:
        """Check that the request fits the job kind."""
        match self.kind:
            case JobKind.CHUNK:
                return isinstance(self.request, ChunkRequest) and self.request.is_valid()
        return False

    def wait(self, timeout: float | None = None) -> bool:
        return self._done.wait(timeout)

    def run(self) -> None:
        """Execute the job on the calling thread.

        Raises:
            JobStateError: If the job already ran.
            Exception: Whatever the job raised; the job is then done with
                no output and the error recorded.
        """
        with self._lock:
            if self._state is not JobState.PENDING:
                raise JobStateError(f"Job {self.job_id} already {self._state.name.lower()}")
            self._state = JobState.RUNNING

        try:
            output = self._execute()
        except Exception as exc:
            self._finish(None, exc)
            raise
        self._finish(output, None)

    def _execute(self) -> Any:
        match self.kind:
            case JobKind.CHUNK:
                return run_chunk_job(self.request)
        raise ValueError(f"Unknown job kind: {self.kind}")

    def _finish(self, output: Any, error: BaseException | None) -> None:
        with self._lock:
            self._output = output
            self._error = error
            self._state = JobState.DONE
        self._done.set()


def chunk_job(request: ChunkRequest, priority_source: PrioritySource = _no_priority) -> Job:
    """Create a chunk generation job."""
    return Job(kind=JobKind.CHUNK, request=request, priority_source=priority_source)

