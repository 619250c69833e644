from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from app.api.deps import get_job_store
from app.core.exceptions import ValidationError
from app.core.rate_limiting import limiter, RATE_LIMITS
from app.models.job import Job
from app.schemas.job import JobStatusResponse
from app.services.job_store import JobStore

router = APIRouter()

def _status_response(job: Job) -> JobStatusResponse:
    return JobStatusResponse(
        id=job.id,
        status=job.status,
        brief=job.brief,
        error=job.error,
        updated_at=job.updated_at
    )

@router.get("/status", response_model=JobStatusResponse)
@limiter.limit(RATE_LIMITS["status"])
def get_status(
    request: Request,
    jobId: Optional[str] = Query(None),
    job_store: JobStore = Depends(get_job_store)
):
    """
    Get the status of a summarization job
    """
    if not jobId or not jobId.strip():
        raise ValidationError("Missing jobId")
    return _status_response(job_store.get_or_404(jobId.strip()))

@router.get("/jobs/{job_id}/status", response_model=JobStatusResponse)
@limiter.limit(RATE_LIMITS["status"])
def get_job_status(
    request: Request,
    job_id: str,
    job_store: JobStore = Depends(get_job_store)
):
    """
    Get the status of a summarization job by path parameter
    """
    return _status_response(job_store.get_or_404(job_id))
