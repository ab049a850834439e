"""Priority job scheduler backed by an elastic pool of worker threads.

The scheduler is driven by a single coordinating thread that calls
``tick()`` once per cycle. Worker threads only ever call back into
``request_job()``. The pending queue, the worker list and the idle queue
are all guarded by one lock; nothing in here blocks while holding it.
"""

import threading
from collections import deque
from collections.abc import Callable
from itertools import count
from typing import Protocol

import structlog

from .job import Job
from .worker import WorkerExecutor

logger = structlog.get_logger()


class Worker(Protocol):
    name: str

    def start(self) -> None: ...

    def assign(self, job: Job) -> bool: ...

    def stop(self) -> None: ...

    def join(self, timeout: float | None = None) -> None: ...


WorkerFactory = Callable[["JobScheduler", str], Worker]


class JobScheduler:
    """Hands pending jobs to idle workers in ascending priority order.

    Args:
        max_workers: Ceiling on concurrently running workers.
        worker_factory: Builds a worker from the scheduler and a name.
    """

    def __init__(self, max_workers: int = 4, worker_factory: WorkerFactory = WorkerExecutor):
        self._max_workers = max(1, int(max_workers))
        self._worker_factory = worker_factory
        self._lock = threading.Lock()
        self._pending: list[Job] = []
        self._workers: list[Worker] = []
        self._idle: deque[Worker] = deque()
        self._closed = False
        self._worker_ids = count(1)

    @property
    def max_workers(self) -> int:
        return self._max_workers

    @max_workers.setter
    def max_workers(self, value: int) -> None:
        with self._lock:
            self._max_workers = max(1, int(value))

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    @property
    def worker_count(self) -> int:
        with self._lock:
            return len(self._workers)

    @property
    def idle_count(self) -> int:
        with self._lock:
            return len(self._idle)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def submit(self, job: Job | None) -> bool:
        """Append a job to the pending queue.

        Missing jobs are ignored. Jobs with an invalid request, and any job
        submitted after shutdown, are logged and dropped.

        Returns:
            True if the job was queued.
        """
        if job is None:
            return False
        if not job.is_valid():
            logger.warning("job_dropped_invalid", job_id=job.job_id, kind=job.kind.name)
            return False
        with self._lock:
            if self._closed:
                logger.debug("job_dropped_closed", job_id=job.job_id)
                return False
            self._pending.append(job)
        return True

    def discard(self, job: Job) -> bool:
        """Withdraw a job that has not been dispatched yet.

        Returns:
            True if the job was still queued.
        """
        with self._lock:
            try:
                self._pending.remove(job)
            except ValueError:
                return False
        return True

    def request_job(self, worker: Worker) -> None:
        """Called by a worker once it is ready for its next job."""
        with self._lock:
            if self._closed or worker not in self._workers:
                return
            if worker not in self._idle:
                self._idle.append(worker)

    def tick(self) -> int:
        """Reconcile the worker pool with demand and dispatch jobs.

        Idle workers are retired when nothing is pending. Otherwise new
        workers are started for the jobs the idle ones cannot cover, within
        ``max_workers``, and pending jobs go from the front of the queue to
        idle workers in the order they became idle.

        Returns:
            Number of jobs dispatched.
        """
        with self._lock:
            if self._closed:
                return 0
            if not self._pending:
                self._retire_idle()
                return 0

            shortfall = len(self._pending) - len(self._idle)
            capacity = self._max_workers - len(self._workers)
            for _ in range(min(capacity, shortfall)):
                self._start_worker()

            dispatched = 0
            while self._idle and self._pending:
                job = self._pending.pop(0)
                if not job.is_pending:
                    continue
                worker = self._idle.popleft()
                if worker.assign(job):
                    dispatched += 1
                else:
                    self._pending.insert(0, job)
            return dispatched

    def reprioritize(self) -> None:
        """Re-sort pending jobs by their current priority; ties keep queue order."""
        with self._lock:
            if len(self._pending) > 1:
                self._pending.sort(key=lambda job: job.priority)

    def shutdown(self, timeout: float | None = None) -> None:
        """Stop dispatching and wait for running jobs to finish.

        Args:
            timeout: Seconds to wait for each worker; None waits indefinitely.
        """
        with self._lock:
            self._closed = True
            workers = list(self._workers)
            self._workers.clear()
            self._idle.clear()
            dropped = len(self._pending)
            self._pending.clear()
            for worker in workers:
                worker.stop()
        for worker in workers:
            worker.join(timeout)
        logger.info("scheduler_shutdown", workers=len(workers), dropped_jobs=dropped)

    def _start_worker(self) -> None:
        worker = self._worker_factory(self, f"chunk-worker-{next(self._worker_ids)}")
        self._workers.append(worker)
        self._idle.append(worker)
        worker.start()

    def _retire_idle(self) -> None:
        if not self._idle:
            return
        retired = len(self._idle)
        while self._idle:
            worker = self._idle.popleft()
            self._workers.remove(worker)
            worker.stop()
        logger.debug("workers_retired", retired=retired, remaining=len(self._workers))
