"""
Upload intake: store the raw document, then record a pending job for it
"""

import logging
from typing import Optional

from app.core.config import settings
from app.core.exceptions import StorageError, ValidationError
from app.core.security_utils import InputValidator
from app.models.job import Job, JobStatus, new_job_id
from app.services.job_store import JobStore
from app.services.storage import BlobStore

logger = logging.getLogger(__name__)


def build_storage_path(job_id: str, filename: str) -> str:
    return f"uploads/{job_id}-{filename}"


class IntakeService:
    """Accepts uploaded judgments and queues them for the brief worker"""

    def __init__(self, job_store: JobStore, blob_store: BlobStore, max_upload_bytes: int = None):
        self.job_store = job_store
        self.blob_store = blob_store
        self.max_upload_bytes = max_upload_bytes or settings.max_upload_bytes

    def submit(self, filename: str, data: bytes, content_type: Optional[str] = None) -> Job:
        if not data:
            raise ValidationError("Uploaded file is empty")
        if len(data) > self.max_upload_bytes:
            raise ValidationError(
                f"File exceeds the {self.max_upload_bytes // (1024 * 1024)} MB upload limit",
                status_code=413
            )

        safe_name = InputValidator.sanitize_filename(filename)
        job_id = new_job_id()
        path = build_storage_path(job_id, safe_name)

        self.blob_store.put(path, data, content_type or "application/octet-stream")
        logger.info(f"Stored upload {path} ({len(data)} bytes)")

        job = Job(
            id=job_id,
            filename=safe_name,
            storage_path=path,
            content_type=content_type,
            size_bytes=len(data),
            status=JobStatus.PENDING.value,
        )
        try:
            return self.job_store.insert(job)
        except StorageError:
            # The blob stays behind; nothing references it
            logger.warning(f"Orphaned blob {path}: job metadata insert failed")
            raise

    def public_url(self, path: str) -> Optional[str]:
        return self.blob_store.public_url(path)
