from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.ai.summarizer import SummarizationService, get_summarization_service
from app.services.brief_worker import BriefWorker
from app.services.chat import ChatService
from app.services.direct_summary import DirectSummaryService
from app.services.intake import IntakeService
from app.services.job_store import JobStore
from app.services.storage import BlobStore, get_blob_store


def get_job_store(db: Session = Depends(get_db)) -> JobStore:
    return JobStore(db)


def get_intake_service(
    job_store: JobStore = Depends(get_job_store),
    blob_store: BlobStore = Depends(get_blob_store)
) -> IntakeService:
    return IntakeService(job_store, blob_store)


def get_brief_worker(
    job_store: JobStore = Depends(get_job_store),
    blob_store: BlobStore = Depends(get_blob_store),
    summarizer: SummarizationService = Depends(get_summarization_service)
) -> BriefWorker:
    return BriefWorker(job_store, blob_store, summarizer)


def get_chat_service(
    job_store: JobStore = Depends(get_job_store),
    summarizer: SummarizationService = Depends(get_summarization_service)
) -> ChatService:
    return ChatService(job_store, summarizer)


def get_direct_summary_service(
    job_store: JobStore = Depends(get_job_store),
    blob_store: BlobStore = Depends(get_blob_store),
    summarizer: SummarizationService = Depends(get_summarization_service)
) -> DirectSummaryService:
    return DirectSummaryService(job_store, blob_store, summarizer)
