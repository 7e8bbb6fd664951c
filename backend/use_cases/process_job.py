"""HashJobProcessor — the deferred work behind every submitted password."""

import logging
import time
from typing import Callable

from domain.hashing import compute_digest
from domain.models import Job
from ports.job_store import JobStorePort
from ports.progress import ProgressPort
from use_cases.shutdown import ShutdownCoordinator

logger = logging.getLogger(__name__)

HASH_DELAY_SECONDS = 5.0


class HashJobProcessor:
    """Waits the fixed delay, hashes, and records the result for one job.

    The processor only holds references to the store, the progress port and
    the coordinator; job id and secret are passed per call so concurrent runs
    share no mutable state.
    """

    def __init__(
        self,
        store: JobStorePort,
        progress: ProgressPort,
        coordinator: ShutdownCoordinator,
        delay_seconds: float = HASH_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        hasher: Callable[[str], str] = compute_digest,
    ):
        self._store = store
        self._progress = progress
        self._coordinator = coordinator
        self._delay = delay_seconds
        self._sleep = sleep
        self._hasher = hasher

    def run(self, job_id: str, secret: str) -> Job:
        # Elapsed covers the whole span including the deliberate delay.
        start = time.monotonic()
        self._sleep(self._delay)

        try:
            digest = self._hasher(secret)
        except Exception as e:
            elapsed = _elapsed_ms(start)
            logger.exception(f"[{job_id}] hashing failed")
            job = Job.failed(job_id, error=str(e) or type(e).__name__, elapsed=elapsed)
            self._store.put(job)
            self._progress.report(job_id, "failed", elapsed_ms=elapsed, detail=job.error)
        else:
            elapsed = _elapsed_ms(start)
            job = Job.completed(job_id, digest=digest, elapsed=elapsed)
            self._store.put(job)
            self._progress.report(job_id, "completed", elapsed_ms=elapsed)

        self._coordinator.check_drained()
        return job


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
