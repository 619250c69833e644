from fastapi import APIRouter, Depends, Request

from app.api.deps import get_direct_summary_service
from app.core.rate_limiting import limiter, RATE_LIMITS
from app.schemas.brief import SummarizeRequest, SummarizeResponse
from app.services.direct_summary import DirectSummaryService

router = APIRouter()

@router.post("/summarize", response_model=SummarizeResponse)
@limiter.limit(RATE_LIMITS["summarize"])
async def summarize_document(
    request: Request,
    payload: SummarizeRequest,
    service: DirectSummaryService = Depends(get_direct_summary_service)
):
    """
    Summarize a stored or public document (or an explicit prompt) and return the brief directly
    """
    job_id, brief = await service.summarize(
        storage_path=payload.storagePath,
        public_url=payload.publicUrl,
        prompt=payload.prompt
    )
    return SummarizeResponse(jobId=job_id, brief=brief)
