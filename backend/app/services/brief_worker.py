"""
Brief worker: claim a pending job, extract its text, summarize, record the outcome
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.core.config import settings
from app.core.exceptions import CaseBriefException, ExtractionError, JobStateError
from app.models.job import Job, JobStatus
from app.services.ai.summarizer import SummarizationService
from app.services.extraction import extract_text
from app.services.job_store import JobStore
from app.services.storage import BlobStore

logger = logging.getLogger(__name__)


@dataclass
class WorkerResult:
    """Outcome of one worker invocation"""
    ok: bool
    job_id: Optional[str] = None
    status: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None
    status_code: int = 200

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "ok": self.ok,
            "jobId": self.job_id,
            "status": self.status,
            "message": self.message,
            "error": self.error,
        }
        return {key: value for key, value in payload.items() if value is not None}


class BriefWorker:
    """Runs at most one job through the pipeline per call"""

    def __init__(
        self,
        job_store: JobStore,
        blob_store: BlobStore,
        summarizer: SummarizationService,
        claim_attempts: int = None
    ):
        self.job_store = job_store
        self.blob_store = blob_store
        self.summarizer = summarizer
        self.claim_attempts = claim_attempts or settings.WORKER_CLAIM_ATTEMPTS

    async def process_next(self) -> WorkerResult:
        job = self.job_store.claim_next(self.claim_attempts)
        if job is None:
            return WorkerResult(ok=True, message="no pending jobs")
        return await self._run(job)

    async def process_job(self, job_id: str) -> WorkerResult:
        """Claim and process one specific pending job"""
        self.job_store.get_or_404(job_id)
        if not self.job_store.claim(job_id):
            raise JobStateError(f"Job {job_id} is not pending")
        return await self._run(self.job_store.get_or_404(job_id))

    def _extract(self, job: Job) -> str:
        data = self.blob_store.get(job.storage_path)
        return extract_text(data, job.storage_path or job.filename)

    async def _run(self, job: Job) -> WorkerResult:
        logger.info(f"Processing job {job.id} ({job.filename})")
        try:
            text = await asyncio.get_event_loop().run_in_executor(None, self._extract, job)
            if not text.strip():
                raise ExtractionError("no text extracted")
            brief = await self.summarizer.generate_brief(text)
        except CaseBriefException as e:
            logger.error(f"Job {job.id} failed: {e.message}")
            self.job_store.mark_failed(job.id, e.message)
            return WorkerResult(
                ok=False,
                job_id=job.id,
                status=JobStatus.FAILED.value,
                error=e.message,
                status_code=e.status_code
            )
        except Exception as e:
            logger.exception(f"Unexpected error processing job {job.id}")
            error = f"Unexpected error: {e}"
            self.job_store.mark_failed(job.id, error)
            return WorkerResult(
                ok=False,
                job_id=job.id,
                status=JobStatus.FAILED.value,
                error=error,
                status_code=500
            )

        self.job_store.mark_done(job.id, brief)
        logger.info(f"Job {job.id} done ({len(brief)} chars)")
        return WorkerResult(ok=True, job_id=job.id, status=JobStatus.DONE.value)
