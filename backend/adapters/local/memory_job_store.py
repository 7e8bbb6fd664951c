"""InMemoryJobStore — process-local job table guarded by a single lock."""

import threading
from typing import Optional

from domain.models import Job
from ports.job_store import JobStorePort


class InMemoryJobStore(JobStorePort):
    """Dict-backed store. Every operation is a short critical section."""

    def __init__(self):
        self._lock = threading.Lock()
        self._jobs: dict[str, Job] = {}

    def put(self, job: Job) -> None:
        with self._lock:
            self._jobs[job.id] = job

    def get(self, job_id: str) -> Optional[Job]:
        with self._lock:
            return self._jobs.get(job_id)

    def snapshot(self) -> list[Job]:
        with self._lock:
            return list(self._jobs.values())

    def count(self) -> int:
        with self._lock:
            return len(self._jobs)

    def add_pending(self) -> Job:
        # Ids are never removed, so len + 1 is unused as long as it is read
        # and claimed under the same lock.
        with self._lock:
            job = Job.pending(str(len(self._jobs) + 1))
            self._jobs[job.id] = job
            return job

    def has_pending(self) -> bool:
        with self._lock:
            return any(job.is_pending for job in self._jobs.values())
