"""Domain <-> DTO mappers.

Converts Job and HashStats (domain) into the pydantic response models so
the use cases never import the HTTP layer.
"""

from domain.models import Job, JobStatus
from models import JobCounts, JobStatusResponse, StatsResponse
from use_cases.hash_jobs import HashStats


def job_to_status(job: Job) -> JobStatusResponse:
    """Convert a Job into the status DTO used for non-digest answers."""
    return JobStatusResponse(id=job.id, status=job.status.value, error=job.error)


def stats_to_dto(stats: HashStats) -> StatsResponse:
    return StatsResponse(total=stats.total, average=stats.average)


def jobs_to_counts(jobs: list[Job]) -> JobCounts:
    """Tally a store snapshot by status."""
    by_status = {status: 0 for status in JobStatus}
    for job in jobs:
        by_status[job.status] += 1
    return JobCounts(
        total=len(jobs),
        pending=by_status[JobStatus.pending],
        completed=by_status[JobStatus.completed],
        failed=by_status[JobStatus.failed],
    )
