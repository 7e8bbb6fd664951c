"""Framework-agnostic domain models for the hash service.

Jobs are immutable values; the store replaces a job wholesale on every
transition so readers never see a half-updated entry. The pydantic DTOs
in models.py stay at the HTTP boundary, with mappers in between.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

PENDING_ELAPSED = -1


class JobStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


class ShutdownState(str, Enum):
    running = "running"
    draining = "draining"
    drained = "drained"


@dataclass(frozen=True)
class Job:
    """A single password-to-digest work item tracked by identifier."""
    id: str
    status: JobStatus = JobStatus.pending
    digest: Optional[str] = None
    elapsed: int = PENDING_ELAPSED
    error: Optional[str] = None

    @classmethod
    def pending(cls, job_id: str) -> "Job":
        return cls(id=job_id)

    @classmethod
    def completed(cls, job_id: str, digest: str, elapsed: int) -> "Job":
        return cls(id=job_id, status=JobStatus.completed, digest=digest, elapsed=elapsed)

    @classmethod
    def failed(cls, job_id: str, error: str, elapsed: int) -> "Job":
        return cls(id=job_id, status=JobStatus.failed, elapsed=elapsed, error=error)

    @property
    def is_pending(self) -> bool:
        return self.status is JobStatus.pending

    @property
    def is_completed(self) -> bool:
        return self.status is JobStatus.completed
