"""SyncJobAdapter — runs jobs inline on the submitting thread."""

from typing import Any, Optional

from ports.job_queue import JobQueuePort


class SyncJobAdapter(JobQueuePort):
    """Executes jobs synchronously. No queue, no background processing.

    submit returns only after the job has finished, which breaks the
    non-blocking submission contract, so create_infra_adapters never hands
    this out. Use it in tests that drive the use cases directly.
    """

    def submit(self, job_id: str, func: Any, *args, **kwargs) -> None:
        func(*args, **kwargs)

    def active_count(self) -> int:
        return 0

    def join(self, timeout: Optional[float] = None) -> bool:
        return True
