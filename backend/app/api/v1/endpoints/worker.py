from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api.deps import get_brief_worker
from app.core.rate_limiting import limiter, RATE_LIMITS
from app.schemas.job import ProcessJobResponse
from app.services.brief_worker import BriefWorker

router = APIRouter()

@router.api_route("/process-job", methods=["GET", "POST"], response_model=ProcessJobResponse)
@limiter.limit(RATE_LIMITS["worker"])
async def process_job(
    request: Request,
    worker: BriefWorker = Depends(get_brief_worker)
):
    """
    Claim the oldest pending job and run it through extraction and summarization
    """
    result = await worker.process_next()
    return JSONResponse(status_code=result.status_code, content=result.to_dict())
