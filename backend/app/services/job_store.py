"""
Job persistence and the job state machine.

Every status change goes through a conditional UPDATE on (id, current status),
so two workers can never both move the same job out of a given state.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import JobNotFoundError, JobStateError, StorageError
from app.models.job import Job, JobStatus, utcnow

logger = logging.getLogger(__name__)

# target status -> statuses it may be entered from
ALLOWED_TRANSITIONS = {
    JobStatus.PROCESSING: {JobStatus.PENDING},
    JobStatus.DONE: {JobStatus.PROCESSING},
    JobStatus.FAILED: {JobStatus.PENDING, JobStatus.PROCESSING},
}

MUTABLE_FIELDS = {"brief", "error"}


class JobStore:
    """Job table access bound to one database session"""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, job: Job) -> Job:
        if job.status == JobStatus.DONE.value and not job.brief:
            raise ValueError("A done job needs a brief")
        try:
            self.db.add(job)
            self.db.commit()
            self.db.refresh(job)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert job {job.id}: {e}")
            raise StorageError("Job metadata insert failed") from e
        logger.info(f"Created job {job.id} ({job.status}) for {job.storage_path}")
        return job

    def get_by_id(self, job_id: str) -> Optional[Job]:
        return self.db.query(Job).filter(Job.id == job_id).first()

    def get_or_404(self, job_id: str) -> Job:
        job = self.get_by_id(job_id)
        if job is None:
            raise JobNotFoundError(f"Job {job_id} not found")
        return job

    def select_oldest_pending(self, exclude: Iterable[str] = ()) -> Optional[Job]:
        query = self.db.query(Job).filter(Job.status == JobStatus.PENDING.value)
        exclude = list(exclude)
        if exclude:
            query = query.filter(Job.id.notin_(exclude))
        return query.order_by(Job.created_at.asc(), Job.id.asc()).first()

    def _conditional_update(self, job_id: str, from_statuses: Iterable[JobStatus], values: dict) -> int:
        values = dict(values, updated_at=utcnow())
        try:
            updated = (
                self.db.query(Job)
                .filter(Job.id == job_id, Job.status.in_([s.value for s in from_statuses]))
                .update(values, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return updated

    def claim(self, job_id: str) -> bool:
        """Move a job from pending to processing; False if another worker got it first"""
        updated = self._conditional_update(
            job_id, [JobStatus.PENDING], {"status": JobStatus.PROCESSING.value}
        )
        return updated == 1

    def claim_next(self, attempts: int = 1) -> Optional[Job]:
        """Claim the oldest pending job, moving past candidates lost to other workers"""
        lost: List[str] = []
        for _ in range(max(attempts, 1)):
            job = self.select_oldest_pending(exclude=lost)
            if job is None:
                return None
            if self.claim(job.id):
                self.db.refresh(job)
                logger.info(f"Claimed job {job.id}")
                return job
            logger.info(f"Job {job.id} was claimed by another worker")
            lost.append(job.id)
        return None

    def update_status(self, job_id: str, status, **fields) -> Job:
        status = JobStatus(status)
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update job fields: {', '.join(sorted(unknown))}")

        allowed_from = ALLOWED_TRANSITIONS.get(status)
        if allowed_from is None:
            raise JobStateError(f"Jobs cannot be moved back to {status.value}")

        values = {"status": status.value, "brief": None, "error": None}
        if status == JobStatus.DONE:
            if not (fields.get("brief") or "").strip():
                raise ValueError("A done job needs a non-empty brief")
            values["brief"] = fields["brief"]
        elif status == JobStatus.FAILED:
            values["error"] = fields.get("error") or "unknown error"

        if self._conditional_update(job_id, allowed_from, values) != 1:
            job = self.get_or_404(job_id)
            raise JobStateError(f"Job {job_id} is {job.status}, cannot move to {status.value}")

        job = self.get_or_404(job_id)
        logger.info(f"Job {job_id} -> {status.value}")
        return job

    def mark_done(self, job_id: str, brief: str) -> Job:
        return self.update_status(job_id, JobStatus.DONE, brief=brief)

    def mark_failed(self, job_id: str, error: str) -> Job:
        return self.update_status(job_id, JobStatus.FAILED, error=error)
