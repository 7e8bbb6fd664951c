"""Submission, retrieval and statistics use cases.

Every use case consults the ShutdownCoordinator before touching the store,
so a draining server refuses all of them with Unavailable.
"""

from dataclasses import dataclass

from domain.errors import EmptyInput, NotFound
from domain.models import Job
from ports.job_queue import JobQueuePort
from ports.job_store import JobStorePort
from ports.progress import ProgressPort
from use_cases.process_job import HashJobProcessor
from use_cases.shutdown import ShutdownCoordinator


@dataclass(frozen=True)
class HashStats:
    total: int
    average: int


class SubmitHashUseCase:
    def __init__(
        self,
        store: JobStorePort,
        queue: JobQueuePort,
        processor: HashJobProcessor,
        progress: ProgressPort,
        coordinator: ShutdownCoordinator,
    ):
        self._store = store
        self._queue = queue
        self._processor = processor
        self._progress = progress
        self._coordinator = coordinator

    def execute(self, secret: str) -> str:
        """Register a pending job and schedule its hashing. Returns the job id."""
        self._coordinator.ensure_accepting()
        if not secret:
            raise EmptyInput()

        with self._coordinator.admission():
            job = self._store.add_pending()
        self._progress.report(job.id, "pending")
        self._queue.submit(job.id, self._processor.run, job.id, secret)
        return job.id


class GetHashUseCase:
    def __init__(self, store: JobStorePort, coordinator: ShutdownCoordinator):
        self._store = store
        self._coordinator = coordinator

    def execute(self, job_id: str) -> Job:
        self._coordinator.ensure_accepting()
        job = self._store.get(job_id)
        if job is None:
            raise NotFound(f"job {job_id} not found")
        return job


class StatsUseCase:
    def __init__(self, store: JobStorePort, coordinator: ShutdownCoordinator):
        self._store = store
        self._coordinator = coordinator

    def execute(self) -> HashStats:
        """Count completed jobs and their average elapsed time in ms."""
        self._coordinator.ensure_accepting()
        durations = [job.elapsed for job in self._store.snapshot() if job.is_completed]
        total = len(durations)
        if total == 0:
            return HashStats(total=0, average=0)
        return HashStats(total=total, average=sum(durations) // total)
