import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, Text
from app.db.session import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_job_id() -> str:
    return str(uuid.uuid4())


class JobStatus(str, Enum):
    """Lifecycle of a summarization job: pending -> processing -> done | failed"""
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.DONE, JobStatus.FAILED)


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, index=True, default=new_job_id)
    filename = Column(String(255), nullable=False)
    storage_path = Column(String(512), nullable=True)
    content_type = Column(String(255), nullable=True)
    size_bytes = Column(Integer, nullable=True)
    status = Column(String(16), nullable=False, default=JobStatus.PENDING.value, index=True)
    brief = Column(Text)
    error = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Job {self.id} {self.status}>"
