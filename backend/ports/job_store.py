"""JobStorePort — abstract interface for the shared job table."""

from abc import ABC, abstractmethod
from typing import Optional

from domain.models import Job


class JobStorePort(ABC):
    @abstractmethod
    def put(self, job: Job) -> None:
        """Insert or overwrite the job stored under job.id."""

    @abstractmethod
    def get(self, job_id: str) -> Optional[Job]:
        """Return the current job for job_id, or None if unknown."""

    @abstractmethod
    def snapshot(self) -> list[Job]:
        """Return a copy of all stored jobs, safe to iterate while writers run."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored jobs."""

    @abstractmethod
    def add_pending(self) -> Job:
        """Allocate the next identifier and store a pending job under it atomically."""

    def has_pending(self) -> bool:
        return any(job.is_pending for job in self.snapshot())
