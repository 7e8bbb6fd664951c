"""JobQueuePort — abstract interface for launching background job work."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class JobQueuePort(ABC):
    @abstractmethod
    def submit(self, job_id: str, func: Any, *args, **kwargs) -> None:
        """Run func(*args, **kwargs) for job_id without blocking the caller."""

    @abstractmethod
    def active_count(self) -> int:
        """Return the number of launched jobs that have not finished yet."""

    @abstractmethod
    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for launched jobs to finish. Returns False on timeout."""
