"""
Synchronous summarization of a document referenced by storage path or URL
"""

import logging
import posixpath
from typing import Optional, Tuple
from urllib.parse import urlparse

from app.core.exceptions import StorageError, ValidationError
from app.core.security_utils import InputValidator
from app.models.job import Job, JobStatus
from app.services.ai.summarizer import SummarizationService
from app.services.job_store import JobStore
from app.services.storage import BlobStore

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


class DirectSummaryService:
    def __init__(self, job_store: JobStore, blob_store: BlobStore, summarizer: SummarizationService):
        self.job_store = job_store
        self.blob_store = blob_store
        self.summarizer = summarizer

    def resolve_file_url(self, storage_path: Optional[str], public_url: Optional[str]) -> Optional[str]:
        if public_url:
            if not InputValidator.validate_url(public_url):
                raise ValidationError("publicUrl must be an http(s) URL")
            return public_url
        if storage_path:
            return self.blob_store.public_url(storage_path)
        return None

    async def summarize(
        self,
        storage_path: Optional[str] = None,
        public_url: Optional[str] = None,
        prompt: Optional[str] = None
    ) -> Tuple[Optional[str], str]:
        """Return (job id, brief); job id is None when the brief could not be saved"""
        storage_path, public_url, prompt = _clean(storage_path), _clean(public_url), _clean(prompt)
        if not (storage_path or public_url or prompt):
            raise ValidationError("storagePath or publicUrl or prompt required")

        file_url = self.resolve_file_url(storage_path, public_url)
        if not file_url and not prompt:
            raise ValidationError(f"No public URL available for {storage_path}")

        brief = await self.summarizer.summarize_reference(file_url, prompt)

        source = storage_path or (urlparse(file_url).path if file_url else "")
        job = Job(
            filename=(posixpath.basename(source) or "direct-summary")[:255],
            storage_path=storage_path,
            status=JobStatus.DONE.value,
            brief=brief,
        )
        try:
            job = self.job_store.insert(job)
        except StorageError as e:
            logger.warning(f"Direct summary not saved: {e.message}")
            return None, brief
        return job.id, brief
