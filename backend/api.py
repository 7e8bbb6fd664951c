"""FastAPI application factory and routes for the hash service.

The app owns one set of adapters and use cases, stored on ``app.state`` so
each app instance (and each test) gets its own job table and shutdown state.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Form, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from config import Config, create_infra_adapters, get_config
from domain.errors import JobFailed
from domain.models import JobStatus
from error_handlers import register_error_handlers
from mappers import job_to_status, jobs_to_counts, stats_to_dto
from middleware_logging import JOB_ID_HEADER, register_request_logging
from models import HealthResponse, MessageResponse, StatsResponse
from use_cases.hash_jobs import GetHashUseCase, StatsUseCase, SubmitHashUseCase
from use_cases.process_job import HASH_DELAY_SECONDS, HashJobProcessor
from use_cases.shutdown import ShutdownCoordinator

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Hello, this is the index page of the password hashing service"

router = APIRouter()


def get_coordinator(request: Request) -> ShutdownCoordinator:
    return request.app.state.coordinator


def get_submit_hash(request: Request) -> SubmitHashUseCase:
    return request.app.state.submit_hash


def get_get_hash(request: Request) -> GetHashUseCase:
    return request.app.state.get_hash


def get_stats(request: Request) -> StatsUseCase:
    return request.app.state.stats


@router.get("/", response_model=MessageResponse)
def index(coordinator: ShutdownCoordinator = Depends(get_coordinator)):
    coordinator.ensure_accepting()
    return MessageResponse(msg=WELCOME_MESSAGE)


@router.post("/hash", response_class=PlainTextResponse)
def submit_hash(
    password: str = Form(""),
    use_case: SubmitHashUseCase = Depends(get_submit_hash),
):
    job_id = use_case.execute(password)
    return PlainTextResponse(job_id, headers={JOB_ID_HEADER: job_id})


@router.get("/hash/{job_id}")
def get_hash(job_id: str, use_case: GetHashUseCase = Depends(get_get_hash)):
    job = use_case.execute(job_id)
    headers = {JOB_ID_HEADER: job.id}
    if job.status is JobStatus.completed:
        return PlainTextResponse(job.digest, headers=headers)
    if job.status is JobStatus.failed:
        raise JobFailed(f"job {job.id} failed: {job.error}")
    # 202 keeps "still hashing" distinct from both a digest and a 404.
    return JSONResponse(status_code=202, content=jsonable_encoder(job_to_status(job)), headers=headers)


@router.get("/stats", response_model=StatsResponse)
def stats(use_case: StatsUseCase = Depends(get_stats)):
    return stats_to_dto(use_case.execute())


@router.get("/shutdown", response_model=MessageResponse)
def shutdown(coordinator: ShutdownCoordinator = Depends(get_coordinator)):
    if not coordinator.request_shutdown():
        logger.info("Shutdown already in progress")
    return MessageResponse(msg="server shutting down")


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    state = request.app.state
    return HealthResponse(
        state=state.coordinator.state.value,
        jobs=jobs_to_counts(state.job_store.snapshot()),
        active_workers=state.job_queue.active_count(),
    )


def create_app(
    cfg: Optional[Config] = None,
    adapters: Optional[dict[str, Any]] = None,
    delay_seconds: float = HASH_DELAY_SECONDS,
) -> FastAPI:
    """Wire adapters and use cases into a FastAPI app.

    delay_seconds exists for tests; the server always runs with the fixed
    HASH_DELAY_SECONDS.
    """
    cfg = cfg or get_config()
    adapters = adapters or create_infra_adapters(cfg)
    store = adapters["job_store"]
    job_queue = adapters["job_queue"]
    progress = adapters["progress"]

    coordinator = ShutdownCoordinator(store)
    processor = HashJobProcessor(store, progress, coordinator, delay_seconds=delay_seconds)

    app = FastAPI(title="Password Hash Service", version="0.1.0", debug=cfg.debug)
    app.state.config = cfg
    app.state.job_store = store
    app.state.job_queue = job_queue
    app.state.coordinator = coordinator
    app.state.submit_hash = SubmitHashUseCase(store, job_queue, processor, progress, coordinator)
    app.state.get_hash = GetHashUseCase(store, coordinator)
    app.state.stats = StatsUseCase(store, coordinator)

    register_request_logging(app)
    register_error_handlers(app)
    app.include_router(router)
    return app
