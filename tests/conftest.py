"""
Pytest configuration and fixtures
"""
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the flat backend/ modules importable without an install
backend_root = Path(__file__).parent.parent / "backend"
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

from adapters.local.log_progress import LogProgressAdapter  # noqa: E402
from adapters.local.memory_job_store import InMemoryJobStore  # noqa: E402
from adapters.local.thread_job import ThreadJobAdapter  # noqa: E402
from api import create_app  # noqa: E402
from config import Config  # noqa: E402
from use_cases.shutdown import ShutdownCoordinator  # noqa: E402

TEST_DELAY = 0.2
ANGRY_MONKEY_DIGEST = (
    "ZEHhWB65gUlzdVwtDQArEyx+KVLzp/aTaRaPlBzYRIFj6vjFdqEb0Q5B8zVKCZ0vKbZPZklJz0Fd7su2A+gf7Q=="
)


class RecordingProgress(LogProgressAdapter):
    """Progress adapter that keeps every report for assertions"""

    def __init__(self):
        self.reports = []

    def report(self, job_id, stage, elapsed_ms=None, detail=None):
        self.reports.append((job_id, stage, elapsed_ms, detail))
        super().report(job_id, stage, elapsed_ms=elapsed_ms, detail=detail)


@pytest.fixture
def store():
    return InMemoryJobStore()


@pytest.fixture
def progress():
    return RecordingProgress()


@pytest.fixture
def coordinator(store):
    return ShutdownCoordinator(store)


@pytest.fixture
def adapters(store, progress):
    return {
        "job_store": store,
        "job_queue": ThreadJobAdapter(),
        "progress": progress,
    }


@pytest.fixture
def app(adapters):
    app = create_app(Config(), adapters=adapters, delay_seconds=TEST_DELAY)
    yield app
    app.state.job_queue.join(timeout=10)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
