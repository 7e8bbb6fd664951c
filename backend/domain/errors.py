"""Error taxonomy shared by the use cases and the HTTP boundary."""

from typing import Optional


class HashServiceError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.detail)
        self.detail = detail or self.detail


class Unavailable(HashServiceError):
    """The server is draining and refuses new work."""
    status_code = 503
    detail = "server shutting down"


class NotFound(HashServiceError):
    status_code = 404
    detail = "job not found"


class EmptyInput(HashServiceError):
    status_code = 422
    detail = "Missing password argument"


class JobFailed(HashServiceError):
    """The job reached a terminal failed state instead of producing a digest."""
    status_code = 500
    detail = "job failed"
