from typing import Optional
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain informational message"""
    msg: str


class JobStatusResponse(BaseModel):
    """Returned by GET /hash/{id} while the digest is not available"""
    id: str
    status: str
    error: Optional[str] = None


class StatsResponse(BaseModel):
    """Completed job count and average processing time in milliseconds."""
    total: int
    average: int


class JobCounts(BaseModel):
    total: int
    pending: int
    completed: int
    failed: int


class HealthResponse(BaseModel):
    status: str = "ok"
    state: str
    jobs: JobCounts
    active_workers: int
