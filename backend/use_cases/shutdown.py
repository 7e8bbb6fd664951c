"""ShutdownCoordinator — drain-then-exit protocol for the hash service.

Owns the draining flag and the two one-shot signals the bootstrap waits on:
``shutdown requested`` (stop taking new work) and ``drained`` (no job is
pending any more, safe to halt). Both are threading.Events, so setting one
twice is a no-op and waiters never block on a second signal.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from domain.errors import Unavailable
from domain.models import ShutdownState
from ports.job_store import JobStorePort

logger = logging.getLogger(__name__)


class ShutdownCoordinator:
    def __init__(self, store: JobStorePort):
        self._store = store
        self._lock = threading.Lock()
        self._draining = False
        self._requested = threading.Event()
        self._drained = threading.Event()

    @property
    def draining(self) -> bool:
        return self._draining

    @property
    def state(self) -> ShutdownState:
        if self._drained.is_set():
            return ShutdownState.drained
        if self._draining:
            return ShutdownState.draining
        return ShutdownState.running

    def ensure_accepting(self) -> None:
        if self._draining:
            raise Unavailable()

    @contextmanager
    def admission(self) -> Iterator[None]:
        """Hold off a shutdown request while new work is being registered.

        A job added inside this block is visible to the drain scan that
        follows any shutdown request.
        """
        with self._lock:
            self.ensure_accepting()
            yield

    def request_shutdown(self) -> bool:
        """Start draining. Returns False if a shutdown was already requested."""
        with self._lock:
            if self._draining:
                return False
            self._draining = True
        logger.info("Shutdown requested, refusing new work")
        self._requested.set()
        self.check_drained()
        return True

    def check_drained(self) -> bool:
        """Fire the drained signal once draining is on and nothing is pending.

        Called by every job processor after it stores its result. The flag is
        set before the coordinator's own scan and results are stored before a
        processor's scan, so whichever of the two runs last sees the drain.
        """
        if not self._draining:
            return False
        if self._store.has_pending():
            return False
        with self._lock:
            if self._drained.is_set():
                return True
            self._drained.set()
        logger.info("All pending jobs finished, drained")
        return True

    def wait_for_shutdown_request(self, timeout: Optional[float] = None) -> bool:
        return self._requested.wait(timeout)

    def wait_until_drained(self, timeout: Optional[float] = None) -> bool:
        return self._drained.wait(timeout)
