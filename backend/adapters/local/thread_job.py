"""ThreadJobAdapter — one background thread per submitted job."""

import logging
import threading
import time
from typing import Any, Optional

from ports.job_queue import JobQueuePort

logger = logging.getLogger(__name__)


class ThreadJobAdapter(JobQueuePort):
    """Starts a daemon thread per job. No pooling and no backpressure."""

    def __init__(self):
        self._lock = threading.Lock()
        self._threads: dict[str, threading.Thread] = {}

    def submit(self, job_id: str, func: Any, *args, **kwargs) -> None:
        thread = threading.Thread(
            target=self._run,
            args=(job_id, func, args, kwargs),
            name=f"hash-job-{job_id}",
            daemon=True,
        )
        with self._lock:
            self._threads[job_id] = thread
        thread.start()

    def _run(self, job_id: str, func: Any, args: tuple, kwargs: dict) -> None:
        try:
            func(*args, **kwargs)
        except Exception:
            logger.exception(f"[{job_id}] background job crashed")
        finally:
            with self._lock:
                self._threads.pop(job_id, None)

    def active_count(self) -> int:
        with self._lock:
            return len(self._threads)

    def join(self, timeout: Optional[float] = None) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            with self._lock:
                threads = list(self._threads.values())
            if not threads:
                return True
            for thread in threads:
                remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
                thread.join(remaining)
            if deadline is not None and time.monotonic() >= deadline:
                return self.active_count() == 0
