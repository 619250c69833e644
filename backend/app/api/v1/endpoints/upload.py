import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, Request, Response, UploadFile

from app.api.deps import get_brief_worker, get_intake_service
from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.rate_limiting import limiter, RATE_LIMITS
from app.schemas.job import StorageInfo, UploadResponse
from app.services.brief_worker import BriefWorker
from app.services.intake import IntakeService
from app.tasks.brief_tasks import dispatch_brief_worker
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/upload", status_code=202, response_model=UploadResponse, response_model_exclude_none=True)
@limiter.limit(RATE_LIMITS["upload"])
async def upload_judgment(
    request: Request,
    response: Response,
    file: Optional[UploadFile] = File(None),
    mode: str = Query("async", pattern="^(async|sync)$"),
    intake: IntakeService = Depends(get_intake_service),
    worker: BriefWorker = Depends(get_brief_worker)
):
    """
    Store an uploaded judgment and queue it for summarization.

    mode=sync runs the worker on the new job before responding.
    """
    if file is None:
        raise ValidationError("Missing file")

    # One byte over the limit is enough to reject the upload
    data = await file.read(settings.max_upload_bytes + 1)
    # Blob write and metadata insert block, keep them off the event loop
    job = await asyncio.get_event_loop().run_in_executor(
        None, intake.submit, file.filename, data, file.content_type
    )
    storage = StorageInfo(path=job.storage_path, publicUrl=intake.public_url(job.storage_path))

    if mode == "sync":
        result = await worker.process_job(job.id)
        response.status_code = result.status_code
        return UploadResponse(
            ok=result.ok,
            jobId=job.id,
            status=result.status,
            storage=storage,
            brief=worker.job_store.get_or_404(job.id).brief,
            error=result.error
        )

    if settings.ENABLE_WORKER_DISPATCH:
        dispatch_brief_worker()

    return UploadResponse(jobId=job.id, status=job.status, storage=storage)
