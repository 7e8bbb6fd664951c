"""ProgressPort — abstract interface for reporting job lifecycle changes."""

from abc import ABC, abstractmethod
from typing import Optional


class ProgressPort(ABC):
    @abstractmethod
    def report(
        self,
        job_id: str,
        stage: str,
        elapsed_ms: Optional[int] = None,
        detail: Optional[str] = None,
    ) -> None:
        """Report a transition. stage: pending, completed, failed."""
