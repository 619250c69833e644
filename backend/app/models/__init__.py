from app.db.session import Base
from .job import Job, JobStatus
