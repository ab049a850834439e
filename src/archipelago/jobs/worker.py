"""Worker threads that run scheduled jobs."""

import queue
import threading
from typing import TYPE_CHECKING

import structlog

from .job import Job

if TYPE_CHECKING:
    from .scheduler import JobScheduler

logger = structlog.get_logger()


class WorkerExecutor:
    """A daemon thread that runs one job at a time.

    The worker blocks on a one-slot inbox while idle. After each job it
    drops its reference to the job and reports back to the scheduler as
    idle. Stopping is cooperative: the stop event is checked after each job,
    so a job that was handed over always runs to completion, even when the
    stop arrives before the worker picked it up.
    """

    def __init__(self, scheduler: "JobScheduler", name: str):
        self.name = name
        self._scheduler = scheduler
        self._inbox: queue.Queue[Job | None] = queue.Queue(maxsize=1)
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._job: Job | None = None
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def is_busy(self) -> bool:
        with self._lock:
            return self._job is not None

    @property
    def is_stopping(self) -> bool:
        return self._stop_event.is_set()

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> None:
        self._thread.start()
        logger.debug("worker_started", worker=self.name)

    def assign(self, job: Job) -> bool:
        """Hand a job to this worker.

        Returns:
            True if accepted, False if the worker already holds a job.
        """
        with self._lock:
            if self._job is not None:
                logger.error(
                    "worker_already_busy",
                    worker=self.name,
                    job_id=job.job_id,
                    held_job_id=self._job.job_id,
                )
                return False
            self._job = job
        self._inbox.put_nowait(job)
        return True

    def stop(self) -> None:
        """Ask the worker to exit once its current job, if any, is finished."""
        self._stop_event.set()
        try:
            self._inbox.put_nowait(None)
        except queue.Full:
            # A job is queued; it runs first and the stop event is seen after it
            pass

    def join(self, timeout: float | None = None) -> None:
        if self._thread.is_alive():
            self._thread.join(timeout)

    def _run(self) -> None:
        while True:
            job = self._inbox.get()
            if job is None:
                if self._stop_event.is_set():
                    break
                continue
            try:
                job.run()
            except Exception:
                logger.exception("job_failed", worker=self.name, job_id=job.job_id)
            finally:
                with self._lock:
                    self._job = None
            if self._stop_event.is_set():
                break
            self._scheduler.request_job(self)
        logger.debug("worker_stopped", worker=self.name)
