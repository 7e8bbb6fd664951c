import logging
import time
from typing import Callable
from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("hash_service.request")

# Set by the /hash routes so the access log can tie a request to its job
JOB_ID_HEADER = "X-Job-Id"


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs one line per request, tagged with the job id when a route set one.

    Form bodies are never read here, so passwords stay out of the log.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        client = request.client.host if request.client else "-"
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000.0
            job_id = response.headers.get(JOB_ID_HEADER, "-")
            logger.info(
                "client=%s method=%s path=%s status=%s job=%s duration_ms=%.2f",
                client, method, path, response.status_code, job_id, duration_ms
            )
            return response
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000.0
            logger.exception(
                "client=%s method=%s path=%s status=%s duration_ms=%.2f UNHANDLED",
                client, method, path, 500, duration_ms
            )
            raise


def register_request_logging(app: FastAPI):
    app.add_middleware(RequestLogMiddleware)
